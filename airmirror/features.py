"""AirPlay feature flags and service announcement records."""

from __future__ import annotations

from dataclasses import dataclass

GLOBAL_MODEL = "AppleTV3,2"
GLOBAL_VERSION = "220.68"
OLD_PROTOCOL_CLIENT_USER_AGENTS = ("AirMyPC/2.0",)
MAX_HWADDR_LEN = 6

FEATURES_1 = 0x5A7FFEE6
FEATURES_2 = 0x0

RAOP_TXTVERS = "1"
RAOP_CH = "2"
RAOP_CN = "0,1,2,3"
RAOP_ET = "0,3,5"
RAOP_VV = "2"
RAOP_RHD = "5.6.0.0"
RAOP_SF = "0x4"
RAOP_SV = "false"
RAOP_DA = "true"
RAOP_SR = "44100"
RAOP_SS = "16"
RAOP_VS = GLOBAL_VERSION
RAOP_TP = "UDP"
RAOP_MD = "0,1,2"
RAOP_VN = "65537"

AIRPLAY_SRCVERS = GLOBAL_VERSION
AIRPLAY_FLAGS = "0x4"
AIRPLAY_VV = "2"
AIRPLAY_PI = "2e388006-13ba-4041-9a67-25dd4a43d536"

_BITS = 64
_MASK32 = 0xFFFFFFFF

# Bits 0..31 of the advertised feature word as the server starts them.
_BASE_BITS = (
    0, 1, 1, 0,  0, 1, 1, 1,
    0, 1, 1, 1,  1, 1, 1, 1,
    1, 1, 1, 1,  1, 1, 1, 0,
    0, 1, 0, 1,  1, 0, 1, 0,
)

BIT_VIDEO = 0
BIT_HLS = 4
BIT_LEGACY_PAIRING = 27
BIT_SCREEN_MULTI_CODEC = 42


@dataclass
class FeatureSet:
    """The 64-bit AirPlay "features" value."""

    value: int = FEATURES_1 | (FEATURES_2 << 32)

    @staticmethod
    def _check(bit: int) -> None:
        if not 0 <= bit < _BITS:
            raise ValueError(f"feature bit {bit} out of range 0..{_BITS - 1}")

    def set_bit(self, bit: int, value: bool) -> None:
        """Switch feature ``bit`` on or off."""
        self._check(bit)
        if value:
            self.value |= 1 << bit
        else:
            self.value &= ~(1 << bit)

    def is_set(self, bit: int) -> bool:
        """True if feature ``bit`` is on."""
        self._check(bit)
        return bool(self.value >> bit & 1)

    @property
    def low(self) -> int:
        return self.value & _MASK32

    @property
    def high(self) -> int:
        return self.value >> 32 & _MASK32

    def as_txt(self) -> str:
        """Format as the two 32-bit hex words used in service records."""
        return f"0x{self.low:X},0x{self.high:X}"


def default_features(
    hls_support: bool = False,
    h265_support: bool = False,
    legacy_pairing: bool = True,
) -> FeatureSet:
    """Build the feature set the server advertises."""
    features = FeatureSet(0)
    for bit, on in enumerate(_BASE_BITS):
        features.set_bit(bit, bool(on))
    features.set_bit(BIT_VIDEO, hls_support)
    features.set_bit(BIT_HLS, hls_support)
    features.set_bit(BIT_SCREEN_MULTI_CODEC, h265_support)
    features.set_bit(BIT_LEGACY_PAIRING, legacy_pairing)
    return features


def raop_txt_record() -> dict[str, str]:
    """The fixed entries of the RAOP (AirTunes) service record."""
    return {
        "txtvers": RAOP_TXTVERS,
        "ch": RAOP_CH,
        "cn": RAOP_CN,
        "da": RAOP_DA,
        "et": RAOP_ET,
        "vv": RAOP_VV,
        "md": RAOP_MD,
        "rhd": RAOP_RHD,
        "sf": RAOP_SF,
        "sr": RAOP_SR,
        "ss": RAOP_SS,
        "sv": RAOP_SV,
        "tp": RAOP_TP,
        "vs": RAOP_VS,
        "vn": RAOP_VN,
    }


def airplay_txt_record(device_id: str, features: FeatureSet) -> dict[str, str]:
    """The entries of the AirPlay service record."""
    return {
        "deviceid": device_id,
        "features": features.as_txt(),
        "flags": AIRPLAY_FLAGS,
        "model": GLOBAL_MODEL,
        "pi": AIRPLAY_PI,
        "srcvers": AIRPLAY_SRCVERS,
        "vv": AIRPLAY_VV,
    }