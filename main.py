import os
import sys
import json
import codecs
import logging
import argparse
from typing import List, Optional
from dotenv import load_dotenv

# Load env before importing other modules that might use os.getenv at module level
load_dotenv(override=True)

from sanitizer import TXTSanitizer
from schemas import Record
from records import build_record_sets, parse_record
from error_handlers import handle_error, ConfigurationException, RecordValidationException

logger = logging.getLogger("txt_sanitizer")


def setup_logging():
    level_name = os.getenv("TXT_SANITIZER_LOG_LEVEL", "INFO").upper()
    level = logging.getLevelName(level_name)
    if not isinstance(level, int):
        raise ConfigurationException(f"Unknown TXT_SANITIZER_LOG_LEVEL: {level_name}")
    logging.basicConfig(level=level, format='%(asctime)s - %(name)s - %(levelname)s - %(message)s')


def get_encoding() -> str:
    """
    Encoding used to turn values into bytes. It has to be a text encoding
    that writes '"' and '\\' as their single ASCII bytes.
    """
    encoding = os.getenv("TXT_SANITIZER_ENCODING", "utf-8")
    try:
        codec = codecs.lookup(encoding)
        sample = '"\\'.encode(encoding)
    except LookupError as e:
        raise ConfigurationException(f"Unusable TXT_SANITIZER_ENCODING {encoding}: {e}")
    if not codec._is_text_encoding or sample != b'"\\':
        raise ConfigurationException(f"TXT_SANITIZER_ENCODING {encoding} is not ASCII compatible")
    return encoding


def load_record(line: str) -> Record:
    """Parses one JSON record object."""
    try:
        payload = json.loads(line)
    except json.JSONDecodeError as e:
        raise RecordValidationException(f"Record is not valid JSON: {e}")
    if not isinstance(payload, dict):
        raise RecordValidationException("Record must be a JSON object")
    return parse_record(payload)


def process_values(lines: List[str], encoding: str, zone: Optional[str] = None) -> List[str]:
    """
    Sanitizes each value, or in zone mode turns JSON records into record set
    JSON lines.
    """
    if zone is None:
        return [TXTSanitizer.sanitize(line.encode(encoding)).decode(encoding) for line in lines]

    records = [load_record(line) for line in lines]
    return [rrset.model_dump_json() for rrset in build_record_sets(zone, records)]


def run_interactive(encoding: str, zone: Optional[str] = None):
    print("Type 'exit' to quit.\n")

    while True:
        try:
            line = input("Value: ")
        except EOFError:
            break
        if line.lower() in ["exit", "quit"]:
            break

        try:
            for output in process_values([line], encoding, zone):
                print(output)
        except (RecordValidationException, UnicodeError) as e:
            logger.error(f"Failed to process value: {e}")
            result = handle_error(e)
            print(f"\n⚠️  {result['message']}\n")


def main(argv: Optional[List[str]] = None) -> int:
    parser = argparse.ArgumentParser(description="Quote and escape DNS TXT record values.")
    parser.add_argument("values", nargs="*", help="Values to sanitize, read interactively when omitted")
    parser.add_argument("--zone", help="Treat values as JSON records in this zone and print record sets")
    args = parser.parse_args(argv)

    try:
        setup_logging()
        encoding = get_encoding()
    except ConfigurationException as e:
        print(f"Invalid configuration: {e}", file=sys.stderr)
        return 2

    if not args.values:
        run_interactive(encoding, args.zone)
        return 0

    try:
        outputs = process_values(args.values, encoding, args.zone)
    except (RecordValidationException, UnicodeError) as e:
        logger.error(f"Failed to process values: {e}")
        print(handle_error(e)["message"], file=sys.stderr)
        return 1

    for output in outputs:
        print(output)
    return 0


if __name__ == "__main__":
    sys.exit(main())
