from __future__ import annotations

from dataclasses import dataclass, field

from urlsluice.errors import InvalidConfigurationError
from urlsluice.patterns import UUID_VERSIONS


@dataclass(frozen=True)
class ExtractionConfig:
    uuid_version: int = 0  # 0 disables UUID extraction
    extract_emails: bool = False
    extract_domains: bool = False
    extract_ips: bool = False
    extract_params: bool = False

    def validate(self) -> None:
        if self.uuid_version != 0 and self.uuid_version not in UUID_VERSIONS:
            raise InvalidConfigurationError(
                "validate",
                f"invalid UUID version {self.uuid_version}: must be between 0 and 5",
            )


@dataclass(frozen=True)
class Chunk:
    data: str
    error: BaseException | None = None


@dataclass
class ExtractionResults:
    uuids: set[str] = field(default_factory=set)
    emails: set[str] = field(default_factory=set)
    domains: set[str] = field(default_factory=set)
    ips: set[str] = field(default_factory=set)
    params: set[str] = field(default_factory=set)

    def is_empty(self) -> bool:
        return not (self.uuids or self.emails or self.domains or self.ips or self.params)

    def merge(self, other: ExtractionResults) -> None:
        """Union ``other`` into this result, category by category."""
        self.uuids |= other.uuids
        self.emails |= other.emails
        self.domains |= other.domains
        self.ips |= other.ips
        self.params |= other.params


# A worker's result for one chunk has the same shape as the final result.
PartialResult = ExtractionResults
