"""Content-type sniffing from raw bytes.

Implements the WHATWG MIME Sniffing algorithm (https://mimesniff.spec.whatwg.org/)
over the first 512 bytes. The object key is never consulted: an edited
``app.yaml`` is uploaded as ``text/plain; charset=utf-8``.
"""

from __future__ import annotations

from typing import Callable

SNIFF_LEN = 512

TEXT_PLAIN = "text/plain; charset=utf-8"
OCTET_STREAM = "application/octet-stream"

_WHITESPACE = b"\t\n\x0c\r "

# Bytes that never occur in text: C0 controls except TAB, LF, FF, CR and ESC.
_BINARY_BYTES = frozenset(
    list(range(0x00, 0x09)) + [0x0B] + list(range(0x0E, 0x1B)) + list(range(0x1C, 0x20))
)

_HTML_TAGS = (
    b"<!DOCTYPE HTML", b"<HTML", b"<HEAD", b"<SCRIPT", b"<IFRAME", b"<H1", b"<DIV",
    b"<FONT", b"<TABLE", b"<A", b"<STYLE", b"<TITLE", b"<B", b"<BODY", b"<BR", b"<P",
    b"<!--",
)

Sniffer = Callable[[bytes, int], "str | None"]


def _first_non_ws(data: bytes) -> int:
    i = 0
    while i < len(data) and data[i] in _WHITESPACE:
        i += 1
    return i


def _html(tag: bytes) -> Sniffer:
    def match(data: bytes, start: int) -> str | None:
        data = data[start:]
        if len(data) < len(tag) + 1:
            return None
        for b, t in zip(data, tag):
            if ord("A") <= t <= ord("Z"):
                b &= 0xDF
            if b != t:
                return None
        # tag-terminating byte
        if data[len(tag)] not in b" >":
            return None
        return "text/html; charset=utf-8"

    return match


def _masked(mask: bytes, pattern: bytes, content_type: str, skip_ws: bool = False) -> Sniffer:
    def match(data: bytes, start: int) -> str | None:
        if skip_ws:
            data = data[start:]
        if len(data) < len(pattern):
            return None
        for b, m, p in zip(data, mask, pattern):
            if b & m != p:
                return None
        return content_type

    return match


def _exact(prefix: bytes, content_type: str) -> Sniffer:
    def match(data: bytes, start: int) -> str | None:
        return content_type if data.startswith(prefix) else None

    return match


def _mp4(data: bytes, start: int) -> str | None:
    # https://mimesniff.spec.whatwg.org/#signature-for-mp4
    if len(data) < 12:
        return None
    box_size = int.from_bytes(data[:4], "big")
    if len(data) < box_size or box_size % 4 != 0:
        return None
    if data[4:8] != b"ftyp":
        return None
    for st in range(8, box_size, 4):
        if st == 12:
            # Bytes 12-15 hold the major brand version.
            continue
        if data[st:st + 3] == b"mp4":
            return "video/mp4"
    return None


def _text(data: bytes, start: int) -> str | None:
    for b in data[start:]:
        if b in _BINARY_BYTES:
            return None
    return TEXT_PLAIN


_EOT_MASK = b"\x00" * 34 + b"\xff\xff"
_EOT_PATTERN = b"\x00" * 34 + b"LP"

_SNIFFERS: tuple[Sniffer, ...] = (
    *(_html(tag) for tag in _HTML_TAGS),
    _masked(b"\xff\xff\xff\xff\xff", b"<?xml", "text/xml; charset=utf-8", skip_ws=True),
    _exact(b"%PDF-", "application/pdf"),
    _exact(b"%!PS-Adobe-", "application/postscript"),

    # UTF BOMs.
    _masked(b"\xff\xff\x00\x00", b"\xfe\xff\x00\x00", "text/plain; charset=utf-16be"),
    _masked(b"\xff\xff\x00\x00", b"\xff\xfe\x00\x00", "text/plain; charset=utf-16le"),
    _masked(b"\xff\xff\xff\x00", b"\xef\xbb\xbf\x00", TEXT_PLAIN),

    # Images.
    _exact(b"\x00\x00\x01\x00", "image/x-icon"),
    _exact(b"\x00\x00\x02\x00", "image/x-icon"),
    _exact(b"BM", "image/bmp"),
    _exact(b"GIF87a", "image/gif"),
    _exact(b"GIF89a", "image/gif"),
    _masked(
        b"\xff\xff\xff\xff\x00\x00\x00\x00\xff\xff\xff\xff\xff\xff",
        b"RIFF\x00\x00\x00\x00WEBPVP",
        "image/webp",
    ),
    _exact(b"\x89PNG\x0d\x0a\x1a\x0a", "image/png"),
    _exact(b"\xff\xd8\xff", "image/jpeg"),

    # Audio and video.
    _masked(b"\xff\xff\xff\xff\x00\x00\x00\x00\xff\xff\xff\xff", b"FORM\x00\x00\x00\x00AIFF", "audio/aiff"),
    _masked(b"\xff\xff\xff", b"ID3", "audio/mpeg"),
    _masked(b"\xff\xff\xff\xff\xff", b"OggS\x00", "application/ogg"),
    _masked(b"\xff\xff\xff\xff\xff\xff\xff\xff", b"MThd\x00\x00\x00\x06", "audio/midi"),
    _masked(b"\xff\xff\xff\xff\x00\x00\x00\x00\xff\xff\xff\xff", b"RIFF\x00\x00\x00\x00AVI ", "video/avi"),
    _masked(b"\xff\xff\xff\xff\x00\x00\x00\x00\xff\xff\xff\xff", b"RIFF\x00\x00\x00\x00WAVE", "audio/wave"),
    _mp4,
    _exact(b"\x1a\x45\xdf\xa3", "video/webm"),

    # Fonts.
    _masked(_EOT_MASK, _EOT_PATTERN, "application/vnd.ms-fontobject"),
    _exact(b"\x00\x01\x00\x00", "font/ttf"),
    _exact(b"OTTO", "font/otf"),
    _exact(b"ttcf", "font/collection"),
    _exact(b"wOFF", "font/woff"),
    _exact(b"wOF2", "font/woff2"),

    # Archives.
    _exact(b"\x1f\x8b\x08", "application/x-gzip"),
    _exact(b"PK\x03\x04", "application/zip"),
    _exact(b"Rar!\x1a\x07\x00", "application/x-rar-compressed"),
    _exact(b"Rar!\x1a\x07\x01\x00", "application/x-rar-compressed"),
    _exact(b"\x00\x61\x73\x6d", "application/wasm"),

    _text,
)


def detect_content_type(data: bytes) -> str:
    """Return the MIME type sniffed from ``data``.

    Always returns a valid type, falling back to ``application/octet-stream``.
    """
    data = data[:SNIFF_LEN]
    start = _first_non_ws(data)
    for sniff in _SNIFFERS:
        content_type = sniff(data, start)
        if content_type is not None:
            return content_type
    return OCTET_STREAM
