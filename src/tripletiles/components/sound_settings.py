from dataclasses import dataclass


@dataclass(slots=True)
class SoundSettings:
    muted: bool = False
