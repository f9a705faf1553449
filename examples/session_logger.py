"""Listen to a running server's UDP plugin port and record every message to a replay log."""

import argparse
import threading
import time

from acudp import ListenerConfig, Message, Recorder, ServerListener, configure_file_logging
from acudp.config import DEFAULT_LOG_DIR


def main() -> None:
    parser = argparse.ArgumentParser(description=__doc__)
    parser.add_argument("--receive-port", type=int, default=12000)
    parser.add_argument("--send-port", type=int, default=11000)
    parser.add_argument("--output", default=time.strftime("%Y-%m-%d_%H-%M-%S.json"))
    parser.add_argument("--log-dir", default=DEFAULT_LOG_DIR)
    args = parser.parse_args()

    configure_file_logging(args.log_dir)
    recorder = Recorder(args.output)

    def on_message(message: Message) -> None:
        print(f"  {message.event.name}: {message!r}")
        recorder(message)

    config = ListenerConfig(receive_port=args.receive_port, send_port=args.send_port)
    print(f"Recording to {args.output} (Ctrl+C to stop)")

    with ServerListener(on_message, config):
        try:
            threading.Event().wait()
        except KeyboardInterrupt:
            print(f"\nStopped, {len(recorder.entries)} messages recorded")


if __name__ == "__main__":
    main()
