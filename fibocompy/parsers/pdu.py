"""
PDU decoding for received SMS messages.

Implements the SMS-DELIVER part of GSM 03.40:
- 7-bit GSM alphabet
- UCS2 Unicode
- 8-bit data (returned as Latin-1 text)
- Optional SMSC address envelope (PDU mode)
"""

import binascii
from dataclasses import dataclass


# GSM 7-bit default alphabet
GSM7_BASIC = (
    "@£$¥èéùìòÇ\nØø\rÅåΔ_ΦΓΛΩΠΨΣΘΞ\x1bÆæßÉ !\"#¤%&'()*+,-./0123456789:;<=>?"
    "¡ABCDEFGHIJKLMNOPQRSTUVWXYZÄÖÑÜ§¿abcdefghijklmnopqrstuvwxyzäöñüà"
)

# GSM 7-bit extension table, entered through the 0x1B escape
GSM7_EXTENDED = {
    0x0A: "\f",
    0x14: "^",
    0x28: "{",
    0x29: "}",
    0x2F: "\\",
    0x3C: "[",
    0x3D: "~",
    0x3E: "]",
    0x40: "|",
    0x65: "€",
}

_MTI_MASK = 0x03
_MTI_DELIVER = 0x00
_UDHI = 0x40


class PDUError(Exception):
    """PDU decoding error."""
    pass


@dataclass
class DeliverPDU:
    """Fields of a decoded SMS-DELIVER TPDU."""
    sender: str
    text: str
    encoding: str


def unpack_septets(octets: bytes, length: int, skip_bits: int = 0) -> list[int]:
    """Unpack 8-bit octets into 7-bit septets."""
    septets = []
    bits = 0
    bits_count = 0

    for octet in octets:
        bits |= octet << bits_count
        bits_count += 8

        if skip_bits:
            drop = min(skip_bits, bits_count)
            bits >>= drop
            bits_count -= drop
            skip_bits -= drop

        while bits_count >= 7 and len(septets) < length:
            septets.append(bits & 0x7F)
            bits >>= 7
            bits_count -= 7

        if len(septets) >= length:
            break

    return septets


def decode_gsm7(data: bytes, length: int, skip_bits: int = 0) -> str:
    """
    Decode packed 7-bit GSM text.

    Args:
        data: Packed 7-bit data
        length: Number of septets (not bytes!)
        skip_bits: Fill bits preceding the first septet
    """
    septets = unpack_septets(data, length, skip_bits)
    if len(septets) < length:
        raise PDUError(f"User data too short: {len(septets)} of {length} septets")

    text = []
    escaped = False
    for septet in septets:
        if escaped:
            text.append(GSM7_EXTENDED.get(septet, "?"))
            escaped = False
        elif septet == 0x1B:
            escaped = True
        else:
            text.append(GSM7_BASIC[septet] if septet < len(GSM7_BASIC) else "?")

    return "".join(text)


def decode_phone_number(data: bytes, length: int, type_of_addr: int) -> str:
    """
    Decode a semi-octet address.

    Args:
        data: Encoded phone number
        length: Number of digits (or useful semi-octets)
        type_of_addr: Type-of-address byte
    """
    if (type_of_addr & 0x70) == 0x50:
        # Alphanumeric sender, GSM 7-bit packed
        return decode_gsm7(data, (length * 4) // 7)

    digits = []
    for octet in data:
        digits.append(f"{octet & 0x0F:X}")
        digits.append(f"{(octet >> 4) & 0x0F:X}")

    number = "".join(digits[:length]).rstrip("F")

    if (type_of_addr & 0x70) == 0x10:
        number = "+" + number

    return number


def _decode_tpdu(pdu: bytes) -> DeliverPDU:
    """Decode a bare SMS-DELIVER TPDU."""
    try:
        idx = 0
        first_octet = pdu[idx]
        idx += 1

        if (first_octet & _MTI_MASK) != _MTI_DELIVER:
            raise PDUError(f"Not an SMS-DELIVER PDU: {first_octet:02X}")

        sender_len = pdu[idx]
        sender_type = pdu[idx + 1]
        idx += 2
        sender_octets = (sender_len + 1) // 2
        sender = decode_phone_number(pdu[idx:idx + sender_octets], sender_len, sender_type)
        idx += sender_octets

        # Protocol identifier is not needed
        idx += 1
        dcs = pdu[idx]
        idx += 1

        # Service centre timestamp
        idx += 7

        udl = pdu[idx]
        idx += 1
        user_data = pdu[idx:]
    except IndexError as e:
        raise PDUError("Truncated SMS-DELIVER PDU") from e

    header_len = 0
    if first_octet & _UDHI:
        if not user_data:
            raise PDUError("Missing user data header")
        header_len = user_data[0] + 1

    if (dcs & 0x0C) == 0x08:
        body = user_data[header_len:udl]
        try:
            text = body.decode("utf-16-be")
        except UnicodeDecodeError as e:
            raise PDUError(f"Invalid UCS2 user data: {e}") from e
        encoding = "ucs2"
    elif (dcs & 0x0C) == 0x04:
        text = user_data[header_len:udl].decode("latin-1")
        encoding = "8bit"
    else:
        # Header occupies whole septets, padded with fill bits
        header_septets = (header_len * 8 + 6) // 7
        fill_bits = header_septets * 7 - header_len * 8
        text = decode_gsm7(user_data[header_len:], udl - header_septets, fill_bits)
        encoding = "gsm7"

    return DeliverPDU(sender=sender, text=text, encoding=encoding)


def decode_sms_deliver(pdu_hex: str) -> DeliverPDU:
    """
    Decode an SMS-DELIVER PDU as listed by AT+CMGL in PDU mode.

    The PDU normally starts with the SMSC address envelope; when that
    reading fails the data is retried as a bare TPDU.

    Args:
        pdu_hex: Hex-encoded PDU string

    Returns:
        DeliverPDU with sender, text and encoding

    Raises:
        PDUError: If the hex string or the PDU cannot be decoded
    """
    try:
        data = binascii.unhexlify(pdu_hex.strip())
    except (binascii.Error, ValueError) as e:
        raise PDUError(f"Error decoding hex string: {e}") from e

    if not data:
        raise PDUError("Empty PDU")

    smsc_len = data[0]
    try:
        return _decode_tpdu(data[1 + smsc_len:])
    except PDUError as envelope_error:
        try:
            return _decode_tpdu(data)
        except PDUError:
            raise envelope_error
