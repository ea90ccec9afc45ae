import argparse
import logging

from signconvert.camera import Environment, SimulatedDevices
from signconvert.clipboard import MemoryClipboard
from signconvert.config import ConverterConfig
from signconvert.controller import ConverterController


def run_scenario(cfg: ConverterConfig, deny: str | None) -> None:
    devices = SimulatedDevices(deny=deny)
    clipboard = MemoryClipboard()

    with ConverterController(cfg, devices, clipboard) as ctl:
        ctl.initialize(Environment(scheme="http", host="localhost"))
        ctl.start_camera()
        print(f"Streaming: {ctl.is_streaming} | Error: {ctl.error}")

        for _ in range(2):
            if ctl.convert_to_text() is None:
                print("Convert to Text is disabled")
                break

        for record in ctl.log:
            print(f"[{record.timestamp}] #{record.id}: {record.text}")

        if len(ctl.log):
            newest = ctl.log.records[0]
            ctl.copy(newest)
            print(f"Copied #{newest.id}: {clipboard.text}")

        ctl.clear_conversions()
        print(f"After clear: {len(ctl.log)} record(s)")


def main():
    parser = argparse.ArgumentParser(description="Run the converter without a browser.")
    parser.add_argument("--deny", metavar="MESSAGE", default=None,
                        help="simulate camera access being refused with this message")
    args = parser.parse_args()

    cfg = ConverterConfig.from_env()
    logging.basicConfig(level=cfg.log_level, format=cfg.log_format)
    run_scenario(cfg, args.deny)


if __name__ == "__main__":
    main()
