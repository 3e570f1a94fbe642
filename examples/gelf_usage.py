#!/usr/bin/env python3
# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Copilot-for-Consensus contributors

"""Example demonstrating GELF log forwarding.

This example shows how to:
- Send log records to a local UDP collector
- Tag messages with diagnostic context
- Inspect handler failures with the silent error reporter
"""

import json
import logging
import socket
import sys
import zlib
from pathlib import Path

# Add package root to path for standalone execution
sys.path.insert(0, str(Path(__file__).parent.parent))

from copilot_gelf import diagnostic_context, create_gelf_handler
from copilot_gelf.silent_error_reporter import SilentErrorReporter


def example_udp_delivery():
    """Example 1: Forward records to a UDP collector on loopback."""
    print("=" * 70)
    print("Example 1: UDP Delivery")
    print("=" * 70)

    collector = socket.socket(socket.AF_INET, socket.SOCK_DGRAM)
    collector.bind(("127.0.0.1", 0))
    collector.settimeout(2.0)
    host, port = collector.getsockname()

    handler = create_gelf_handler(
        graylog_host=f"udp:{host}",
        graylog_port=port,
        facility="examples",
        additional_fields=["environment=demo"],
        environ={},
    )
    log = logging.getLogger("examples.udp")
    log.addHandler(handler)
    log.setLevel(logging.INFO)

    try:
        log.warning("retry %d of %d", 1, 5)
        with diagnostic_context(remoteAddr="203.0.113.5"):
            log.info("Request accepted from {0}", "client-7")

        for _ in range(2):
            data, _ = collector.recvfrom(65535)
            message = json.loads(zlib.decompress(data))
            print(f"\n{json.dumps(message, indent=2, sort_keys=True)}")
    finally:
        log.removeHandler(handler)
        handler.close()
        collector.close()
    print()


def example_error_reporting():
    """Example 2: Delivery failures go to the error reporter."""
    print("=" * 70)
    print("Example 2: Error Reporting")
    print("=" * 70)

    reporter = SilentErrorReporter()
    handler = create_gelf_handler(environ={}, error_reporter=reporter)
    log = logging.getLogger("examples.unconfigured")
    log.addHandler(handler)

    try:
        log.error("This record has nowhere to go")
    finally:
        log.removeHandler(handler)
        handler.close()

    for error in reporter.get_errors():
        print(f"\n[{error['code'].name}] {error['message']}")
    print()


def main():
    """Run all examples."""
    print("\n" + "=" * 70)
    print(" GELF Logging Examples")
    print("=" * 70 + "\n")

    try:
        example_udp_delivery()
        example_error_reporting()

        print("=" * 70)
        print("All examples completed successfully!")
        print("=" * 70)
        print()

    except Exception as e:
        print(f"\n✗ Error running examples: {e}")
        import traceback
        traceback.print_exc()
        return 1

    return 0


if __name__ == "__main__":
    sys.exit(main())
