from dataclasses import dataclass
from typing import Any

from utils.exceptions import ConfigNotLoadedError


@dataclass(frozen=True)
class LoadedConfig:
    """
    Result of a successful load: either a present configuration value or an
    explicit absence (the environment held the JSON literal `null`).

    Build instances with `LoadedConfig.present(value)` / `LoadedConfig.absent()`.
    """

    is_present: bool
    value: Any = None

    @classmethod
    def present(cls, value: Any) -> "LoadedConfig":
        return cls(is_present=True, value=value)

    @classmethod
    def absent(cls) -> "LoadedConfig":
        return cls(is_present=False)

    @property
    def is_absent(self) -> bool:
        return not self.is_present

    def unwrap(self) -> Any:
        """Return the configuration value, raising if it is absent."""
        if not self.is_present:
            raise ConfigNotLoadedError("Tried to read a configuration value, but the configuration is absent (null)")
        return self.value

    def get(self, default: Any = None) -> Any:
        return self.value if self.is_present else default

    def __bool__(self) -> bool:
        return self.is_present

    def __repr__(self) -> str:
        # Never render the value itself
        if self.is_present:
            return f"LoadedConfig.present(<{type(self.value).__name__}>)"
        return "LoadedConfig.absent()"
