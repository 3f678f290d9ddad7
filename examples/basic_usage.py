"""
Learnosity SDK: Basic Usage Example

Demonstrates:
- Items API initialisation with a request packet
- Data API request with an action
- Questions API envelope (no security wrapper)
"""

import os

from learnosity_sdk import Init

CONSUMER_KEY = os.environ.get("LEARNOSITY_CONSUMER_KEY", "yis0TYCu7U9V4o7M")
# Demo secret only. Never ship a real secret in source.
CONSUMER_SECRET = os.environ.get(
    "LEARNOSITY_CONSUMER_SECRET", "74c5fd430cf1242a527f6223aebd42d30464be22"
)


def main():
    """Print envelopes for three services."""
    security = {
        "consumer_key": CONSUMER_KEY,
        "domain":       "localhost",
        "user_id":      "demo-student",
    }

    print("=" * 60)
    print("Items API")
    print("=" * 60)
    items = Init("items", security, CONSUMER_SECRET, {
        "activity_id":    "demo-activity",
        "rendering_type": "assess",
        "items":          ["item-1", "item-2"],
    })
    print(items.generate())
    print()

    print("=" * 60)
    print("Data API (action: get)")
    print("=" * 60)
    data = Init("data", security, CONSUMER_SECRET, '{"limit": 10}')
    data.set_action("get")
    print(data.generate())
    print()

    print("=" * 60)
    print("Questions API")
    print("=" * 60)
    questions = Init("questions", security, CONSUMER_SECRET, {"type": "local_practice"})
    print(questions.generate())


if __name__ == "__main__":
    main()
