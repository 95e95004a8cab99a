"""Configuration for AES encryption runs."""

from dataclasses import dataclass

from .modes import MODES, get_mode
from .padding import PADDING_SCHEMES

# How the IV travels with the ciphertext:
#   prepend  - output is IV || ciphertext (Cipher.seal / Cipher.unseal)
#   separate - IV is handed over out of band
IV_TRANSPORTS = ("prepend", "separate")


@dataclass
class CipherConfig:
    """Configuration object for a Cipher.

    Names a chaining mode, a padding scheme and the IV transport
    convention. Validated on construction.
    """

    # Chaining mode: "cbc" or "ecb"
    mode: str = "cbc"

    # Padding scheme: "pkcs7" or "none"
    padding: str = "pkcs7"

    # IV transport convention (ignored by modes without an IV)
    iv_transport: str = "prepend"

    def __post_init__(self) -> None:
        """Validate configuration parameters."""
        self.mode = self.mode.lower()
        self.padding = self.padding.lower()
        if self.mode not in MODES:
            raise ValueError(
                f"Unknown mode '{self.mode}', expected one of {', '.join(MODES)}"
            )
        if self.padding not in PADDING_SCHEMES:
            raise ValueError(
                f"Unknown padding '{self.padding}', "
                f"expected one of {', '.join(PADDING_SCHEMES)}"
            )
        if self.iv_transport not in IV_TRANSPORTS:
            raise ValueError(
                f"Unknown iv_transport '{self.iv_transport}', "
                f"expected one of {', '.join(IV_TRANSPORTS)}"
            )

    @property
    def requires_iv(self) -> bool:
        """Whether the configured mode needs an IV."""
        return get_mode(self.mode).requires_iv

    def to_dict(self) -> dict[str, str]:
        return {
            "mode": self.mode,
            "padding": self.padding,
            "iv_transport": self.iv_transport,
        }
