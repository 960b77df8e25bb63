import logging
from typing import Union

logger = logging.getLogger(__name__)

BytesLike = Union[bytes, bytearray, memoryview]


class TXTSanitizer:
    """
    Quotes and escapes DNS TXT record values.

    The output is always wrapped in double quotes and every embedded double
    quote is preceded by an odd number of backslashes. Feeding the output back
    in returns it unchanged, so a value read from the DNS API can be sent back
    in an update without being escaped twice.
    """

    QUOTE = ord('"')
    BACKSLASH = ord('\\')

    @staticmethod
    def escape_run_length(data: bytes, index: int) -> int:
        """Number of consecutive backslashes directly before data[index]."""
        count = 0
        j = index - 1
        while j >= 0 and data[j] == TXTSanitizer.BACKSLASH:
            count += 1
            j -= 1
        return count

    @staticmethod
    def needs_rewrap(quoted: bool, escaped: int) -> bool:
        """
        True when an already quoted value had an even number of quotes escaped.

        Catches input such as `"foo" and other stuff "bar"`, which should become
        `"\\"foo\\" and other stuff \\"bar\\""` rather than
        `"foo\\" and other stuff \\"bar"`. If the wrapped content ends in an
        odd run of backslashes, sanitize() adds one more so the closing
        escaped quote stays escaped.
        """
        return quoted and escaped > 0 and escaped % 2 == 0

    @staticmethod
    def sanitize(raw: BytesLike) -> bytes:
        """
        Returns raw as a quoted TXT presentation value.

        Quotes that are not escaped (preceded by an even backslash run) get one
        more backslash. Quotes preceded by an odd run are left alone. Other
        bytes, including non-ASCII ones, are copied as they are.
        """
        if isinstance(raw, str):
            raise TypeError("sanitize() expects bytes, use sanitize_text() for str")
        contents = bytes(raw)

        quoted = len(contents) >= 2 and contents[0] == TXTSanitizer.QUOTE and contents[-1] == TXTSanitizer.QUOTE
        if quoted:
            contents = contents[1:-1]

        escaped = 0
        buf = bytearray()
        pos = 0
        while pos < len(contents):
            idx = contents.find(b'"', pos)
            if idx == -1:
                buf += contents[pos:]
                break
            buf += contents[pos:idx]

            # \\" is an escaped backslash and a bare quote, \\\" is fully escaped
            if TXTSanitizer.escape_run_length(contents, idx) % 2 == 0:
                escaped += 1
                buf += b'\\'
            buf += b'"'
            pos = idx + 1

        out = bytearray(b'"')
        if TXTSanitizer.needs_rewrap(quoted, escaped):
            logger.debug(f"Re-wrapping quoted value with {escaped} escaped quotes")
            # a trailing odd backslash run would swallow the closing \"
            if TXTSanitizer.escape_run_length(buf, len(buf)) % 2 == 1:
                buf += b'\\'
            out += b'\\"' + buf + b'\\"'
        else:
            out += buf
        out += b'"'

        if escaped:
            logger.debug(f"Escaped {escaped} embedded quote(s)")
        return bytes(out)

    @staticmethod
    def sanitize_text(value: str, encoding: str = "utf-8") -> str:
        """Same as sanitize() for text values."""
        return TXTSanitizer.sanitize(value.encode(encoding)).decode(encoding)


txt_sanitize = TXTSanitizer.sanitize
