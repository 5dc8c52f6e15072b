import sys
import re
import argparse
import base64
import binascii
import unicodedata
import urllib.parse
from abc import ABC, abstractmethod
from dataclasses import dataclass
from types import MappingProxyType
from typing import Dict, List, Mapping, NamedTuple, Optional

__version__ = "1.0.0"

DEFAULT_LETTER_SEPARATOR = " "
DEFAULT_WORD_SEPARATOR = " / "
DEFAULT_GROUP_SIZE_BITS = 8
DEFAULT_DELIMITER = " "
DEFAULT_BYTES_PER_GROUP = 1
DEFAULT_SHIFT = 13

# Emitted by strict Morse decode for any token missing from the table
UNKNOWN_PLACEHOLDER = "\ufffd"

# Verbose mode (disabled by default, enabled with --verbose)
VERBOSE = False

def log_info(msg: str):
    """Print info message only if verbose mode is enabled."""
    if VERBOSE:
        print(f"[INFO] {msg}", file=sys.stderr)

def log_warn(msg: str):
    """Print warning message only if verbose mode is enabled."""
    if VERBOSE:
        print(f"[WARN] {msg}", file=sys.stderr)

# ==========================================
#  ERRORS: Diagnostic-carrying exceptions
# ==========================================

class TranscodeError(ValueError):
    """
    Raised inside a decoder when the input cannot be decoded.

    Never escapes a public transcoding call: the boundary catches it and
    returns `diagnostic` in place of the decoded text.
    """

    def __init__(self, diagnostic: str, detail: str = ""):
        super().__init__(detail or diagnostic)
        self.diagnostic = diagnostic
        self.detail = detail or diagnostic

class MalformedInput(TranscodeError):
    """Wrong alphabet, odd-length hex, bad percent-escape, bad Base64 padding."""

class InvalidDecodedBytes(TranscodeError):
    """Structurally valid encoding whose bytes are not valid UTF-8."""

class UnknownSymbol(TranscodeError):
    """Morse token or character absent from the symbol table."""

# ==========================================
#  OPTIONS: Per-transcoder configuration
# ==========================================

@dataclass(frozen=True)
class MorseOptions:
    letter_separator: str = DEFAULT_LETTER_SEPARATOR
    word_separator: str = DEFAULT_WORD_SEPARATOR
    keep_unknown: bool = False
    strict: bool = False

@dataclass(frozen=True)
class BinaryOptions:
    group_size_bits: int = DEFAULT_GROUP_SIZE_BITS
    delimiter: str = DEFAULT_DELIMITER
    uppercase: bool = False

@dataclass(frozen=True)
class HexOptions:
    delimiter: str = DEFAULT_DELIMITER
    uppercase: bool = True
    bytes_per_group: int = DEFAULT_BYTES_PER_GROUP

@dataclass(frozen=True)
class RotationOptions:
    shift: int = DEFAULT_SHIFT

class CodepointRecord(NamedTuple):
    character: str
    codepoint: int
    hex_label: str

# ==========================================
#  FRAMEWORK: Abstract Base Class & Registry
# ==========================================

class TranscoderStrategy(ABC):
    """Abstract base class that all transcoders must implement."""

    # Options dataclass accepted by encode/decode (None when not configurable)
    options_type = None

    @property
    @abstractmethod
    def name(self) -> str:
        """The command-line name for this transcoder."""
        pass

    @property
    @abstractmethod
    def description(self) -> str:
        """Short description for help text."""
        pass

    @abstractmethod
    def encode(self, text: str, options=None) -> str:
        pass

    @abstractmethod
    def decode(self, text: str, options=None) -> str:
        pass

    def _options(self, options):
        if options is None and self.options_type is not None:
            return self.options_type()
        return options

TRANSCODER_REGISTRY: Dict[str, TranscoderStrategy] = {}

def register_transcoder(cls):
    """Decorator to auto-register transcoders."""
    transcoder = cls()
    TRANSCODER_REGISTRY[transcoder.name] = transcoder
    return cls

def _utf8_bytes(text: str) -> bytes:
    """UTF-8 view of text; lone surrogates become U+FFFD so encoding stays total."""
    try:
        return text.encode("utf-8")
    except UnicodeEncodeError:
        log_warn("Input contains lone surrogates. Replacing them with U+FFFD.")
        return re.sub("[\ud800-\udfff]", UNKNOWN_PLACEHOLDER, text).encode("utf-8")

# ==========================================
#  SYMBOL TABLE: International Morse Code
# ==========================================

def _invert(table: Mapping[str, str]) -> Mapping[str, str]:
    inverse = {}
    for char, signal in table.items():
        if signal in inverse:
            raise ValueError(f"Signal {signal!r} assigned to both {inverse[signal]!r} and {char!r}")
        inverse[signal] = char
    return MappingProxyType(inverse)

MORSE_CODE: Mapping[str, str] = MappingProxyType({
    "A": ".-", "B": "-...", "C": "-.-.", "D": "-..", "E": ".", "F": "..-.",
    "G": "--.", "H": "....", "I": "..", "J": ".---", "K": "-.-", "L": ".-..",
    "M": "--", "N": "-.", "O": "---", "P": ".--.", "Q": "--.-", "R": ".-.",
    "S": "...", "T": "-", "U": "..-", "V": "...-", "W": ".--", "X": "-..-",
    "Y": "-.--", "Z": "--..",
    "0": "-----", "1": ".----", "2": "..---", "3": "...--", "4": "....-",
    "5": ".....", "6": "-....", "7": "--...", "8": "---..", "9": "----.",
    ".": ".-.-.-", ",": "--..--", "?": "..--..", "'": ".----.", "!": "-.-.--",
    "/": "-..-.", "(": "-.--.", ")": "-.--.-", "&": ".-...", ":": "---...",
    ";": "-.-.-.", "=": "-...-", "+": ".-.-.", "-": "-....-", "_": "..--.-",
    '"': ".-..-.", "$": "...-..-", "@": ".--.-.",
})

REVERSE_MORSE_CODE: Mapping[str, str] = _invert(MORSE_CODE)

# ==========================================
#  METHOD 1: Morse Code
# ==========================================

@register_transcoder
class MorseTranscoder(TranscoderStrategy):
    name = "morse"
    description = "International Morse code. Tolerates mixed separators and look-alike dots/dashes."
    options_type = MorseOptions

    # Look-alikes folded onto the ASCII signal characters before tokenizing
    LOOKALIKES = str.maketrans({
        "\u2013": "-",   # en dash
        "\u2014": "-",   # em dash
        "\u2212": "-",   # minus sign
        "\u00b7": ".",   # middle dot
        "\u2022": ".",   # bullet
        "\u2219": ".",   # bullet operator
        "\u200b": None,  # zero width space
        "\u200c": None,  # zero width non-joiner
        "\u200d": None,  # zero width joiner
        "\ufeff": None,  # zero width no-break space
    })

    def signal_for(self, char: str) -> str:
        try:
            return MORSE_CODE[char]
        except KeyError:
            raise UnknownSymbol("Unknown character", f"No Morse signal for {char!r}") from None

    def char_for(self, signal: str) -> str:
        try:
            return REVERSE_MORSE_CODE[signal]
        except KeyError:
            raise UnknownSymbol("Unknown signal", f"No character for Morse token {signal!r}") from None

    def _word_splitter(self, word_sep: str):
        alternatives = [r"\s*/\s*", r"\s{3,}"]
        if word_sep:
            alternatives.insert(0, re.escape(word_sep))
        return re.compile("|".join(f"(?:{alt})" for alt in alternatives))

    def _letter_splitter(self, letter_sep: str):
        return re.compile(re.escape(letter_sep) if letter_sep else r"\s+")

    def encode(self, text: str, options: MorseOptions = None) -> str:
        options = self._options(options)
        words = []
        for word in text.upper().split(" "):
            signals = []
            for char in word:
                try:
                    signals.append(self.signal_for(char))
                except UnknownSymbol as e:
                    if options.keep_unknown:
                        signals.append(char)
                    else:
                        log_info(f"{e.detail}. Dropped.")
            words.append(options.letter_separator.join(s for s in signals if s))
        return options.word_separator.join(words)

    def decode(self, text: str, options: MorseOptions = None) -> str:
        options = self._options(options)
        cleaned = text.translate(self.LOOKALIKES).strip()
        if not cleaned:
            return ""

        word_splitter = self._word_splitter(options.word_separator)
        letter_splitter = self._letter_splitter(options.letter_separator)

        decoded_words = []
        for word in word_splitter.split(cleaned):
            if not word:
                continue
            letters = []
            for token in letter_splitter.split(word):
                if not token:
                    continue
                try:
                    letters.append(self.char_for(token))
                except UnknownSymbol as e:
                    log_info(f"{e.detail}.")
                    if options.strict:
                        letters.append(UNKNOWN_PLACEHOLDER)
            decoded_words.append("".join(letters))
        return " ".join(decoded_words)

# ==========================================
#  METHOD 2: Binary (one group per code point)
# ==========================================

@register_transcoder
class BinaryTranscoder(TranscoderStrategy):
    name = "binary"
    description = "Base-2 value of each Unicode code point, zero-padded to the group size."
    options_type = BinaryOptions

    NON_BINARY = re.compile(r"[^01\s]")
    WHITESPACE_RUN = re.compile(r"\s+")

    def _to_code_point(self, token: str) -> str:
        value = int(token, 2)
        if value > sys.maxunicode or 0xD800 <= value <= 0xDFFF:
            raise MalformedInput("Invalid binary sequence", f"{token} is not a Unicode scalar value")
        return chr(value)

    def encode(self, text: str, options: BinaryOptions = None) -> str:
        options = self._options(options)
        groups = []
        for char in text:
            bits = format(ord(char), "b")
            if options.group_size_bits > 0:
                width = -(-len(bits) // options.group_size_bits) * options.group_size_bits
                bits = bits.zfill(width)
            groups.append(bits)
        out = options.delimiter.join(groups)
        return out.upper() if options.uppercase else out

    def decode(self, text: str, options=None) -> str:
        stripped = text.strip()
        if not stripped:
            return ""
        cleaned = self.WHITESPACE_RUN.sub(" ", self.NON_BINARY.sub(" ", stripped))
        tokens = cleaned.split()
        try:
            if not tokens:
                raise MalformedInput("Invalid binary sequence", "No binary digits in input")
            return "".join(self._to_code_point(token) for token in tokens)
        except TranscodeError as e:
            log_warn(f"Binary decode failed: {e.detail}")
            return e.diagnostic

# ==========================================
#  METHOD 3: Hexadecimal (UTF-8 bytes)
# ==========================================

@register_transcoder
class HexTranscoder(TranscoderStrategy):
    name = "hex"
    description = "Two hex digits per UTF-8 byte, grouped and delimited."
    options_type = HexOptions

    NON_HEX = re.compile(r"[^0-9a-fA-F]")

    def encode(self, text: str, options: HexOptions = None) -> str:
        options = self._options(options)
        pairs = [f"{byte:02X}" if options.uppercase else f"{byte:02x}" for byte in _utf8_bytes(text)]
        size = max(options.bytes_per_group, 1)
        groups = ["".join(pairs[i:i + size]) for i in range(0, len(pairs), size)]
        return options.delimiter.join(groups)

    def _hex_bytes(self, text: str) -> bytes:
        cleaned = self.NON_HEX.sub("", text)
        if len(cleaned) % 2 != 0:
            raise MalformedInput("Invalid hex length", f"{len(cleaned)} hex digits")
        return bytes.fromhex(cleaned)

    def decode(self, text: str, options=None) -> str:
        try:
            data = self._hex_bytes(text)
            try:
                return data.decode("utf-8")
            except UnicodeDecodeError as e:
                raise InvalidDecodedBytes("Invalid hex sequence", str(e)) from e
        except TranscodeError as e:
            log_warn(f"Hex decode failed: {e.detail}")
            return e.diagnostic

# ==========================================
#  METHOD 4: Base64
# ==========================================

@register_transcoder
class Base64Transcoder(TranscoderStrategy):
    name = "base64"
    description = "Standard Base64 alphabet with '=' padding over UTF-8 bytes."

    # atob() skips ASCII whitespace only
    ASCII_WHITESPACE = re.compile(r"[ \t\n\r\f]")

    def encode(self, text: str, options=None) -> str:
        try:
            data = text.encode("utf-8")
        except UnicodeEncodeError as e:
            log_warn(f"Base64 encode failed: {e}")
            return "Encoding error"
        return base64.b64encode(data).decode("ascii")

    def _b64_bytes(self, text: str) -> bytes:
        compact = self.ASCII_WHITESPACE.sub("", text)
        if len(compact) % 4 == 1:
            raise MalformedInput("Invalid Base64", "Truncated quantum")
        # Unpadded input is accepted; anything else must be well-formed
        if "=" not in compact:
            compact += "=" * (-len(compact) % 4)
        try:
            return base64.b64decode(compact, validate=True)
        except (binascii.Error, ValueError) as e:
            raise MalformedInput("Invalid Base64", str(e)) from e

    def decode(self, text: str, options=None) -> str:
        try:
            data = self._b64_bytes(text)
            try:
                return data.decode("utf-8")
            except UnicodeDecodeError as e:
                raise InvalidDecodedBytes("Invalid Base64", str(e)) from e
        except TranscodeError as e:
            log_warn(f"Base64 decode failed: {e.detail}")
            return e.diagnostic

# ==========================================
#  METHOD 5: Percent-Encoding (URL)
# ==========================================

@register_transcoder
class UrlTranscoder(TranscoderStrategy):
    name = "url"
    description = "Percent-escapes every UTF-8 byte outside A-Z a-z 0-9 - _ . ~ ! * ' ( )"

    # quote() always keeps letters, digits and "_.-~"
    SAFE = "!*'()"
    BAD_ESCAPE = re.compile(r"%(?![0-9a-fA-F]{2})")

    def encode(self, text: str, options=None) -> str:
        return urllib.parse.quote(_utf8_bytes(text), safe=self.SAFE)

    def decode(self, text: str, options=None) -> str:
        try:
            bad = self.BAD_ESCAPE.search(text)
            if bad:
                raise MalformedInput("Invalid URL encoding", f"Malformed escape at offset {bad.start()}")
            try:
                return urllib.parse.unquote_to_bytes(text).decode("utf-8")
            except UnicodeError as e:
                raise InvalidDecodedBytes("Invalid URL encoding", str(e)) from e
        except TranscodeError as e:
            log_warn(f"URL decode failed: {e.detail}")
            return e.diagnostic

# ==========================================
#  METHOD 6: ROT / Caesar
# ==========================================

@register_transcoder
class RotationCipher(TranscoderStrategy):
    """
    Caesar shift over ASCII letters.

    Lowercase and uppercase rotate independently, so case is never flipped.
    Everything else (digits, punctuation, non-ASCII letters) passes through.
    Decoding applies the inverse shift; with the default shift of 13 the
    two directions coincide.
    """

    name = "rot"
    description = "Caesar/ROT letter rotation (default ROT13). Not encryption."
    options_type = RotationOptions

    def _rotate(self, text: str, shift: int) -> str:
        shift %= 26
        result = []
        for char in text:
            if 'a' <= char <= 'z':
                result.append(chr((ord(char) - ord('a') + shift) % 26 + ord('a')))
            elif 'A' <= char <= 'Z':
                result.append(chr((ord(char) - ord('A') + shift) % 26 + ord('A')))
            else:
                result.append(char)
        return ''.join(result)

    def encode(self, text: str, options: RotationOptions = None) -> str:
        return self._rotate(text, self._options(options).shift)

    def decode(self, text: str, options: RotationOptions = None) -> str:
        return self._rotate(text, -self._options(options).shift)

# ==========================================
#  INSPECTOR: Unicode code points
# ==========================================

def hex_label(codepoint: int) -> str:
    return f"U+{codepoint:04X}"

def inspect_unicode(text: str) -> List[CodepointRecord]:
    """One record per code point, in input order. Astral characters yield a single record."""
    return [CodepointRecord(char, ord(char), hex_label(ord(char))) for char in text]

def format_records(records: List[CodepointRecord]) -> str:
    lines = []
    for record in records:
        name = unicodedata.name(record.character, "<unnamed>")
        lines.append(f"{record.hex_label:<10} {record.codepoint:>8}  {record.character!r:<6} {name}")
    return "\n".join(lines)

# ==========================================
#  FUNCTION API
# ==========================================

def morse_encode(text: str, letter_sep: str = DEFAULT_LETTER_SEPARATOR,
                 word_sep: str = DEFAULT_WORD_SEPARATOR, keep_unknown: bool = False) -> str:
    options = MorseOptions(letter_separator=letter_sep, word_separator=word_sep, keep_unknown=keep_unknown)
    return TRANSCODER_REGISTRY["morse"].encode(text, options)

def morse_decode(code: str, letter_sep: str = DEFAULT_LETTER_SEPARATOR,
                 word_sep: str = DEFAULT_WORD_SEPARATOR, strict: bool = False) -> str:
    options = MorseOptions(letter_separator=letter_sep, word_separator=word_sep, strict=strict)
    return TRANSCODER_REGISTRY["morse"].decode(code, options)

def text_to_binary(text: str, group_size_bits: int = DEFAULT_GROUP_SIZE_BITS,
                   delimiter: str = DEFAULT_DELIMITER, uppercase: bool = False) -> str:
    return TRANSCODER_REGISTRY["binary"].encode(text, BinaryOptions(group_size_bits, delimiter, uppercase))

def binary_to_text(binary: str) -> str:
    return TRANSCODER_REGISTRY["binary"].decode(binary)

def text_to_hex(text: str, delimiter: str = DEFAULT_DELIMITER, uppercase: bool = True,
                bytes_per_group: int = DEFAULT_BYTES_PER_GROUP) -> str:
    return TRANSCODER_REGISTRY["hex"].encode(text, HexOptions(delimiter, uppercase, bytes_per_group))

def hex_to_text(hex_string: str) -> str:
    return TRANSCODER_REGISTRY["hex"].decode(hex_string)

def text_to_base64(text: str) -> str:
    return TRANSCODER_REGISTRY["base64"].encode(text)

def base64_to_text(b64: str) -> str:
    return TRANSCODER_REGISTRY["base64"].decode(b64)

def url_encode(text: str) -> str:
    return TRANSCODER_REGISTRY["url"].encode(text)

def url_decode(text: str) -> str:
    return TRANSCODER_REGISTRY["url"].decode(text)

def rotate(text: str, shift: int = DEFAULT_SHIFT) -> str:
    return TRANSCODER_REGISTRY["rot"].encode(text, RotationOptions(shift))

# ==========================================
#  CLI LOGIC
# ==========================================

def list_transcoders():
    """Print all available transcoders."""
    print("\nAvailable Transcoders:")
    print("=" * 60)
    for name, transcoder in TRANSCODER_REGISTRY.items():
        print(f"  {name:<8} {transcoder.description}")
    print("=" * 60)
    print(f"\nTotal: {len(TRANSCODER_REGISTRY)} transcoder(s) registered.")

def build_options(method: str, args: argparse.Namespace):
    """Map CLI flags onto the options record of the selected transcoder."""
    if method == "morse":
        return MorseOptions(args.letter_sep, args.word_sep, args.keep_unknown, args.strict)
    if method == "binary":
        return BinaryOptions(args.group_size, args.delimiter, bool(args.upper))
    if method == "hex":
        uppercase = True if args.upper is None else args.upper
        return HexOptions(args.delimiter, uppercase, args.bytes_per_group)
    if method == "rot":
        return RotationOptions(args.shift)
    return None

def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="transcode-engine",
        description="Text transcoder: Morse, binary, hex, Base64, URL, ROT and a Unicode inspector",
        formatter_class=argparse.RawTextHelpFormatter
    )

    parser.add_argument("--version", action="version", version=f"%(prog)s {__version__}")

    method_help = "\n".join(f"  {k:<8}: {v.description}" for k, v in TRANSCODER_REGISTRY.items())
    parser.add_argument("-m", "--method", choices=list(TRANSCODER_REGISTRY.keys()), default="morse",
                        help=f"Select transcoder (default: morse).\n{method_help}")

    # Main action group
    action_group = parser.add_mutually_exclusive_group(required=True)
    action_group.add_argument("-e", "--encode", action="store_true", help="Encode mode")
    action_group.add_argument("-d", "--decode", action="store_true", help="Decode mode")
    action_group.add_argument("-u", "--inspect", action="store_true", help="List the Unicode code points of the input")
    action_group.add_argument("-l", "--list", action="store_true", help="List all available transcoders")

    # Morse options
    parser.add_argument("--letter-sep", default=DEFAULT_LETTER_SEPARATOR, metavar="SEP",
                        help=f"Morse letter separator (default: {DEFAULT_LETTER_SEPARATOR!r})")
    parser.add_argument("--word-sep", default=DEFAULT_WORD_SEPARATOR, metavar="SEP",
                        help=f"Morse word separator (default: {DEFAULT_WORD_SEPARATOR!r})")
    parser.add_argument("--keep-unknown", action="store_true",
                        help="Morse encode: pass characters without a signal through verbatim")
    parser.add_argument("--strict", action="store_true",
                        help=f"Morse decode: emit {UNKNOWN_PLACEHOLDER} for unknown tokens instead of dropping them")

    # Binary / hex options
    parser.add_argument("--group-size", type=int, default=DEFAULT_GROUP_SIZE_BITS, metavar="BITS",
                        help=f"Binary: pad each code point to a multiple of BITS, 0 disables (default: {DEFAULT_GROUP_SIZE_BITS})")
    parser.add_argument("--bytes-per-group", type=int, default=DEFAULT_BYTES_PER_GROUP, metavar="N",
                        help=f"Hex: bytes per delimited group (default: {DEFAULT_BYTES_PER_GROUP})")
    parser.add_argument("--delimiter", default=DEFAULT_DELIMITER, metavar="SEP",
                        help=f"Binary/hex group delimiter (default: {DEFAULT_DELIMITER!r})")
    case_group = parser.add_mutually_exclusive_group()
    case_group.add_argument("--upper", dest="upper", action="store_true", default=None,
                            help="Uppercase digits (hex default)")
    case_group.add_argument("--lower", dest="upper", action="store_false",
                            help="Lowercase digits")

    # Rotation options
    parser.add_argument("--shift", type=int, default=DEFAULT_SHIFT, metavar="N",
                        help=f"ROT shift, any integer (default: {DEFAULT_SHIFT})")

    # Verbose output
    parser.add_argument("-v", "--verbose", action="store_true",
                        help="Enable verbose output (info and warning messages)")

    # I/O options
    io_group = parser.add_mutually_exclusive_group()
    io_group.add_argument("-t", "--text", help="Direct text input")
    io_group.add_argument("-i", "--input", help="Input file path")

    parser.add_argument("-o", "--output", help="Output file path")
    return parser

def main(argv: Optional[List[str]] = None):
    global VERBOSE

    parser = build_parser()
    args = parser.parse_args(argv)
    VERBOSE = args.verbose

    # Handle --list action
    if args.list:
        list_transcoders()
        return

    # 1. READ INPUT
    source_text = ""
    if args.text is not None:
        source_text = args.text
    elif args.input:
        try:
            with open(args.input, "r", encoding="utf-8") as f:
                source_text = f.read()
        except FileNotFoundError:
            sys.exit(f"Error: File '{args.input}' not found.")
    elif not sys.stdin.isatty():
        source_text = sys.stdin.read()
    else:
        print("[TRANSCODE] Paste input below. Ctrl+D (Unix) or Ctrl+Z (Win) to end:")
        try:
            source_text = sys.stdin.read()
        except KeyboardInterrupt:
            sys.exit(0)

    # 2. TRANSCODE
    if args.inspect:
        result = format_records(inspect_unicode(source_text))
    else:
        transcoder = TRANSCODER_REGISTRY[args.method]
        options = build_options(args.method, args)
        log_info(f"Using {transcoder.name} with {options}")
        if args.encode:
            result = transcoder.encode(source_text, options)
        else:
            # Files and piped input usually end with a newline that is not part of the payload
            if args.text is None:
                source_text = source_text.rstrip("\r\n")
            result = transcoder.decode(source_text, options)

    # 3. WRITE OUTPUT
    if args.output:
        try:
            with open(args.output, "w", encoding="utf-8") as f:
                f.write(result)
                f.write("\n")
        except OSError as e:
            sys.exit(f"Error writing output: {e}")
    else:
        print(result)

if __name__ == "__main__":
    main()
