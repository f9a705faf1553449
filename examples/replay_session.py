"""Replay a recorded session log, printing each message as it would have arrived."""

import argparse

from acudp import Message, replay_messages


def main() -> None:
    parser = argparse.ArgumentParser(description=__doc__)
    parser.add_argument("log", help="replay log written by session_logger.py")
    parser.add_argument("--speed", type=float, default=1.0, help="playback multiplier")
    parser.add_argument("--max-delay", type=float, default=None, help="cap on any single wait, seconds")
    args = parser.parse_args()

    def on_message(message: Message) -> None:
        print(f"  {message.event.name}: {message!r}")

    try:
        count = replay_messages(args.log, args.speed, on_message, max_delay=args.max_delay)
    except KeyboardInterrupt:
        print("\nStopped")
        return

    print(f"\nReplayed {count} messages")


if __name__ == "__main__":
    main()
