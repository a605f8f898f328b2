#!/usr/bin/env python3
"""
Room Status Poller for the Smart Home Room Status Service

This script polls a running service the way the dashboard does and logs a
per-room summary, which makes it handy for smoke-testing a deployment and for
watching provider fallback from the outside.
"""

import requests
import time
import json
import argparse
from collections import defaultdict
from typing import Dict, Any, List, Optional
import logging

# Configure logging
logging.basicConfig(
    level=logging.INFO,
    format='%(asctime)s - %(levelname)s - %(message)s'
)
logger = logging.getLogger(__name__)

# Configuration
BASE_URL = "http://localhost:3000/api"


class RoomPoller:
    """Dashboard-style poller"""

    def __init__(self, base_url: str = BASE_URL, timeout: float = 15):
        self.base_url = base_url.rstrip("/")
        self.timeout = timeout
        self.session = requests.Session()

    def ping(self) -> bool:
        """Check that the service is up"""
        try:
            response = self.session.get(f"{self.base_url}/ping", timeout=self.timeout)
            if response.status_code == 200 and response.json().get("ok"):
                logger.info(f"Service is up (server time {response.json().get('at')})")
                return True
            logger.error(f"Ping failed: {response.status_code} - {response.text}")
            return False
        except requests.RequestException as e:
            logger.error(f"Ping error: {e}")
            return False

    def fetch_rooms(self) -> Optional[List[Dict[str, Any]]]:
        """Fetch the normalized device list"""
        try:
            response = self.session.get(f"{self.base_url}/rooms", timeout=self.timeout)
            if response.status_code == 200:
                return response.json()
            logger.error(f"Rooms fetch failed: {response.status_code} - {response.text}")
            return None
        except requests.RequestException as e:
            logger.error(f"Rooms fetch error: {e}")
            return None

    def fetch_snapshot(self) -> Optional[Dict[str, Any]]:
        """Fetch the cloud registry diagnostic listing"""
        try:
            response = self.session.get(f"{self.base_url}/st/snapshot", timeout=self.timeout)
            if response.status_code == 200:
                return response.json()
            logger.warning(f"Snapshot unavailable: {response.status_code} - {response.text}")
            return None
        except requests.RequestException as e:
            logger.error(f"Snapshot error: {e}")
            return None

    @staticmethod
    def summarize(devices: List[Dict[str, Any]]) -> Dict[str, Any]:
        """Group devices by room and count powered-on climate devices"""
        rooms: Dict[str, List[str]] = defaultdict(list)
        powered_on = 0
        for device in devices:
            label = f"{device.get('name')} [{device.get('type')}]"
            if "tempCur" in device:
                label += f" {device['tempCur']}°"
            if "mode" in device:
                label += f" {device['mode']}"
            rooms[device.get("room") or "(no room)"].append(label)
            if device.get("power"):
                powered_on += 1

        return {
            "devices": len(devices),
            "powered_on": powered_on,
            "rooms": dict(rooms)
        }

    def poll(self, interval: float, count: int, with_snapshot: bool = False) -> Dict[str, Any]:
        """Poll /rooms ``count`` times (0 means forever)"""
        successful = 0
        failed = 0
        iteration = 0

        while count == 0 or iteration < count:
            iteration += 1
            devices = self.fetch_rooms()
            if devices is None:
                failed += 1
            else:
                successful += 1
                logger.info(f"Poll {iteration}: {json.dumps(self.summarize(devices), ensure_ascii=False)}")

            if with_snapshot:
                snapshot = self.fetch_snapshot()
                if snapshot:
                    logger.info(f"Snapshot lists {len(snapshot.get('devices', []))} devices")

            if count == 0 or iteration < count:
                time.sleep(interval)

        return {"polls": iteration, "successful": successful, "failed": failed}


def main():
    """Main function"""
    parser = argparse.ArgumentParser(description="Smart Home Room Status Poller")
    parser.add_argument("--base-url", default=BASE_URL, help="Service API base URL")
    parser.add_argument("--interval", type=float, default=10, help="Delay between polls (seconds)")
    parser.add_argument("--count", type=int, default=1, help="Number of polls (0 = until interrupted)")
    parser.add_argument("--snapshot", action="store_true", help="Also fetch the registry snapshot")

    args = parser.parse_args()

    poller = RoomPoller(args.base_url)

    if not poller.ping():
        logger.error("Service unreachable. Cannot proceed with polling.")
        return

    try:
        results = poller.poll(args.interval, args.count, args.snapshot)
        if results["failed"]:
            logger.warning(f"{results['failed']} of {results['polls']} polls failed")
        else:
            logger.info(f"All {results['polls']} polls succeeded")
    except KeyboardInterrupt:
        logger.info("Polling interrupted by user")


if __name__ == "__main__":
    main()
