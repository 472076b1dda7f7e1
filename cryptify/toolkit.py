"""
Text processing facade.

Dispatches a (method, mode, text) request to the matching cipher, builds a
fresh cipher from the supplied key material for every call, and renders
RSA cipher values as a JSON array string.
"""

import logging
from dataclasses import dataclass, field
from enum import Enum
from typing import Any, Dict, Optional, Union

from .core_crypto.digraph_cipher import DigraphCipher, Direction
from .core_crypto.errors import CipherError, InvalidKeyError
from .core_crypto.modular_cipher import (
    ModularCipher,
    decode_cipher_values,
    encode_cipher_values,
    parse_prime,
)
from .integration.event_logger import EventLogger


logger = logging.getLogger(__name__)


class CipherMethod(Enum):
    PLAYFAIR = "playfair"
    RSA = "rsa"


class OperationMode(Enum):
    ENCRYPT = "encrypt"
    DECRYPT = "decrypt"


@dataclass
class ProcessResult:
    """Output of one process_text call."""
    method: CipherMethod
    mode: OperationMode
    output: str
    details: Dict[str, Any] = field(default_factory=dict)


def _process_playfair(mode: OperationMode, text: str, key: Optional[str]) -> ProcessResult:
    if key is None:
        raise InvalidKeyError("A Playfair key is required")

    cipher = DigraphCipher(key)
    output = cipher.transform(text, Direction(mode.value))
    return ProcessResult(
        method=CipherMethod.PLAYFAIR,
        mode=mode,
        output=output,
        details={'matrix': cipher.matrix_snapshot()},
    )


def _process_rsa(mode: OperationMode, text: str, p: Any, q: Any) -> ProcessResult:
    cipher = ModularCipher(parse_prime(p), parse_prime(q))

    if mode is OperationMode.ENCRYPT:
        output = encode_cipher_values(cipher.encrypt(text))
    else:
        output = cipher.decrypt(decode_cipher_values(text))

    return ProcessResult(
        method=CipherMethod.RSA,
        mode=mode,
        output=output,
        details={'public_key': cipher.public_key()},
    )


def process_text(
    method: Union[str, CipherMethod],
    mode: Union[str, OperationMode],
    text: str,
    *,
    key: Optional[str] = None,
    p: Union[int, str, None] = None,
    q: Union[int, str, None] = None,
    event_logger: Optional[EventLogger] = None
) -> ProcessResult:
    """
    Encrypt or decrypt text with a freshly built cipher.

    Args:
        method: "playfair" or "rsa"
        mode: "encrypt" or "decrypt"
        text: Input text; for RSA decryption a JSON array of integers
        key: Playfair keyword
        p: First RSA prime (int or decimal string)
        q: Second RSA prime (int or decimal string)
        event_logger: Optional audit log to record the outcome in

    Returns:
        ProcessResult with the output string and display details

    Raises:
        ValueError: If method or mode is unknown
        CipherError: If key material or input is invalid
    """
    method = CipherMethod(method)
    mode = OperationMode(mode)
    key_material = key if method is CipherMethod.PLAYFAIR else f"{p},{q}"
    key_material = key_material or ""

    try:
        if method is CipherMethod.PLAYFAIR:
            result = _process_playfair(mode, text, key)
        else:
            result = _process_rsa(mode, text, p, q)
    except CipherError as exc:
        logger.debug("%s %s failed: %s", method.value, mode.value, exc)
        if event_logger is not None:
            event_logger.log_failure(method.value, mode.value, key_material, exc)
        raise

    if event_logger is not None:
        event_logger.log_cipher_created(method.value, key_material)
        event_logger.log_operation(
            method.value, mode.value, key_material,
            input_length=len(text),
            output_length=len(result.output),
        )
    return result
