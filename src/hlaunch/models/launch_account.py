"""Launch-ready account model."""

from dataclasses import dataclass

MSA_KIND = "msa"
OFFLINE_KIND = "legacy"


@dataclass(frozen=True)
class LaunchAccount:
    """The identity and credentials handed to a single game launch."""

    kind: str
    name: str
    id: str
    access_token: str
    xuid: str = ""

    def __repr__(self) -> str:
        return (
            f"LaunchAccount(kind={self.kind!r}, name={self.name!r}, id={self.id!r}, "
            f"access_token='***', xuid={self.xuid!r})"
        )
