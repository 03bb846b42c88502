"""Tests for ClientHello parsing and SNI extraction."""

from __future__ import annotations

import logging
import struct

import pytest

from snipeek import extract_sni, parse_client_hello
from snipeek.core.span import ByteSpan
from snipeek.errors import (
    DecodeError,
    IllegalChar,
    NotClientHello,
    NotHandshake,
    NotUtf8,
    TooLong,
    TruncatedBody,
    TruncatedLength,
    UnsupportedClientVersion,
    UnsupportedVersion,
)

from tests.fixtures.client_hello import (
    CLIENT_HELLO_GOOGLE,
    CLIENT_HELLO_WITHOUT_SNI,
    GOOGLE_HOSTNAME,
    alpn_extension,
    build_client_hello,
    build_sni_client_hello,
    extension,
    frame_record,
    sni_entry,
    sni_extension,
)


def _patch(data: bytes, index: int, value: int) -> bytes:
    patched = bytearray(data)
    patched[index] = value
    return bytes(patched)


class TestCapturedClientHellos:
    """Tests against captured browser ClientHellos."""

    def test_google_server_name(self, google_client_hello: bytes) -> None:
        hello = parse_client_hello(google_client_hello)
        assert hello.server_name == GOOGLE_HOSTNAME

    def test_server_name_is_zero_copy(self) -> None:
        hello = parse_client_hello(CLIENT_HELLO_GOOGLE)
        span = hello.server_name_span

        assert span is not None
        assert span.buffer.obj is CLIENT_HELLO_GOOGLE
        assert span.offset == CLIENT_HELLO_GOOGLE.index(GOOGLE_HOSTNAME.encode("ascii"))
        assert len(span) == len(GOOGLE_HOSTNAME)
        assert span.within(hello.record.fragment)

    def test_without_server_name(self, client_hello_without_sni: bytes) -> None:
        hello = parse_client_hello(client_hello_without_sni)

        assert hello.server_name is None
        assert hello.server_name_span is None
        assert len(hello.extensions) == 111

    def test_client_version(self) -> None:
        assert parse_client_hello(CLIENT_HELLO_GOOGLE).client_version == (3, 3)

    def test_accepts_bytearray_and_memoryview(self) -> None:
        assert parse_client_hello(bytearray(CLIENT_HELLO_GOOGLE)).server_name == GOOGLE_HOSTNAME
        assert parse_client_hello(memoryview(CLIENT_HELLO_GOOGLE)).server_name == GOOGLE_HOSTNAME

    def test_accepts_span(self) -> None:
        data = b"junk" + CLIENT_HELLO_GOOGLE
        span = ByteSpan.of(data).tail(4)
        hello = parse_client_hello(span)

        assert hello.server_name == GOOGLE_HOSTNAME
        assert hello.server_name_span.buffer.obj is data

    def test_trailing_record_ignored(self) -> None:
        data = CLIENT_HELLO_GOOGLE + frame_record(b"\x00", content_type=23)
        assert parse_client_hello(data).server_name == GOOGLE_HOSTNAME

    def test_accepts_strided_memoryview(self) -> None:
        interleaved = bytes(b for pair in zip(CLIENT_HELLO_GOOGLE, b"\xee" * len(CLIENT_HELLO_GOOGLE)) for b in pair)
        hello = parse_client_hello(memoryview(interleaved)[::2])

        assert hello.server_name == GOOGLE_HOSTNAME
        assert hello.server_name_span.buffer.obj is interleaved
        assert extract_sni(memoryview(interleaved)[::2]) == GOOGLE_HOSTNAME

    def test_strided_memoryview_bad_hostname(self) -> None:
        data = build_sni_client_hello(b"host\xff.example")
        interleaved = bytes(b for pair in zip(data, bytes(len(data))) for b in pair)
        with pytest.raises(NotUtf8):
            parse_client_hello(memoryview(interleaved)[::2])


class TestBuiltClientHellos:
    """Tests against crafted ClientHellos."""

    def test_sni_with_session_id(self) -> None:
        data = build_sni_client_hello("test.example.com", session_id=b"\x42" * 32)
        assert parse_client_hello(data).server_name == "test.example.com"

    def test_tls10_client_version(self) -> None:
        hello = parse_client_hello(build_sni_client_hello("a.example", client_version=(3, 1)))
        assert hello.client_version == (3, 1)

    def test_no_sni_extension(self) -> None:
        assert parse_client_hello(build_client_hello([alpn_extension()])).server_name is None

    def test_no_extensions_block(self) -> None:
        hello = parse_client_hello(build_client_hello(None))

        assert hello.server_name is None
        assert len(hello.extensions) == 0

    def test_empty_extensions_block(self) -> None:
        assert parse_client_hello(build_client_hello([])).server_name is None

    def test_single_trailing_byte_is_malformed(self) -> None:
        with pytest.raises(TruncatedLength):
            parse_client_hello(build_client_hello(extensions_block=b"\x00"))

    def test_extensions_length_overruns(self) -> None:
        with pytest.raises(TruncatedBody):
            parse_client_hello(build_client_hello(extensions_block=b"\x00\x20" + alpn_extension()))

    def test_extensions_trailing_bytes_ignored(self) -> None:
        ext_bytes = sni_extension(sni_entry("a.example")) + b"\x00\x0a\x00"
        block = struct.pack("!H", len(ext_bytes)) + ext_bytes
        assert parse_client_hello(build_client_hello(extensions_block=block)).server_name == "a.example"

    def test_corrupt_extension_fails_whole_message(self) -> None:
        broken = struct.pack("!HH", 10, 200) + b"\x00\x00"
        with pytest.raises(TruncatedBody):
            parse_client_hello(build_client_hello([sni_extension(sni_entry("a.example")), broken]))

    def test_sni_payload_without_list_length(self) -> None:
        with pytest.raises(TruncatedLength):
            parse_client_hello(build_client_hello([extension(0, b"\x00")]))

    def test_empty_server_name_list(self) -> None:
        assert parse_client_hello(build_client_hello([extension(0, b"\x00\x00")])).server_name is None

    def test_only_other_name_types(self) -> None:
        data = build_client_hello([sni_extension(sni_entry(b"opaque", name_type=1))])
        assert parse_client_hello(data).server_name is None


class TestGating:
    """Tests for version and message type checks."""

    @pytest.mark.parametrize("major", [0, 2, 4, 0x16])
    def test_record_version(self, major: int) -> None:
        with pytest.raises(UnsupportedVersion):
            parse_client_hello(_patch(CLIENT_HELLO_GOOGLE, 1, major))

    def test_version_checked_before_content_type(self) -> None:
        data = _patch(_patch(CLIENT_HELLO_GOOGLE, 0, 23), 1, 2)
        with pytest.raises(UnsupportedVersion):
            parse_client_hello(data)

    @pytest.mark.parametrize("content_type", [20, 21, 23, 0])
    def test_content_type(self, content_type: int) -> None:
        with pytest.raises(NotHandshake):
            parse_client_hello(_patch(CLIENT_HELLO_GOOGLE, 0, content_type))

    def test_server_hello(self) -> None:
        with pytest.raises(NotClientHello):
            parse_client_hello(build_client_hello([], handshake_type=2))

    def test_empty_handshake_fragment(self) -> None:
        with pytest.raises(NotClientHello):
            parse_client_hello(frame_record(b""))

    def test_client_version(self) -> None:
        with pytest.raises(UnsupportedClientVersion):
            parse_client_hello(build_sni_client_hello("a.example", client_version=(2, 0)))

    def test_empty_handshake_body(self) -> None:
        with pytest.raises(UnsupportedClientVersion):
            parse_client_hello(frame_record(b"\x01\x00\x00\x00"))

    def test_record_minor_version_not_checked(self) -> None:
        data = build_sni_client_hello("a.example", record_version=(3, 9))
        assert parse_client_hello(data).server_name == "a.example"


class TestHostnameValidation:
    """Tests for hostname checks applied during parsing."""

    @pytest.mark.parametrize("name", [b"bad host", b"tab\there", b"ctl\x07", b"semi;colon"])
    def test_illegal_char(self, name: bytes) -> None:
        with pytest.raises(IllegalChar):
            parse_client_hello(build_sni_client_hello(name))

    def test_too_long(self) -> None:
        with pytest.raises(TooLong):
            parse_client_hello(build_sni_client_hello(b"a" * 256))

    def test_longest_allowed(self) -> None:
        name = ".".join(["a" * 63] * 4)[:255]
        assert parse_client_hello(build_sni_client_hello(name)).server_name == name

    def test_not_utf8(self) -> None:
        with pytest.raises(NotUtf8):
            parse_client_hello(build_sni_client_hello(b"host\xff.example"))


class TestFirstMatchWins:
    """Tests for repeated server names."""

    def test_two_entries(self) -> None:
        data = build_client_hello([sni_extension(sni_entry("first.example"), sni_entry("second.example"))])
        assert parse_client_hello(data).server_name == "first.example"

    def test_two_extensions(self) -> None:
        data = build_client_hello(
            [
                sni_extension(sni_entry("first.example")),
                alpn_extension(),
                sni_extension(sni_entry("second.example")),
            ]
        )
        assert parse_client_hello(data).server_name == "first.example"


class TestTruncation:
    """Truncated inputs must fail cleanly or stay in bounds."""

    @pytest.mark.parametrize("data", [CLIENT_HELLO_GOOGLE, CLIENT_HELLO_WITHOUT_SNI])
    def test_every_prefix_fails(self, data: bytes) -> None:
        for length in range(len(data)):
            with pytest.raises(DecodeError):
                parse_client_hello(data[:length])

    def test_every_reframed_prefix(self) -> None:
        # Cut the handshake at every length but keep the record header consistent,
        # so the inner length fields are what catch the truncation.
        fragment = CLIENT_HELLO_GOOGLE[5:]
        for length in range(len(fragment)):
            data = frame_record(fragment[:length])
            try:
                hello = parse_client_hello(data)
            except DecodeError:
                continue
            whole = ByteSpan.of(data)
            assert hello.record.fragment.within(whole)
            assert hello.extensions.within(hello.record.fragment)
            if hello.server_name_span is not None:
                assert hello.server_name_span.within(hello.record.fragment)


class TestExtractSni:
    """Tests for the extract_sni convenience wrapper."""

    def test_found(self) -> None:
        assert extract_sni(CLIENT_HELLO_GOOGLE) == GOOGLE_HOSTNAME

    def test_absent(self) -> None:
        assert extract_sni(CLIENT_HELLO_WITHOUT_SNI) is None

    def test_failure_is_none(self, caplog: pytest.LogCaptureFixture) -> None:
        with caplog.at_level(logging.DEBUG, logger="snipeek.core.client_hello"):
            assert extract_sni(frame_record(b"\x00", content_type=23)) is None
        assert "not_handshake" in caplog.text

    def test_invalid_hostname_is_none(self) -> None:
        assert extract_sni(build_sni_client_hello(b"bad host")) is None
