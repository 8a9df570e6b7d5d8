"""Configuration management for the scanner."""

from dataclasses import dataclass, field
from multiprocessing import cpu_count
from os import environ
from pathlib import Path


def _env_flag(name: str) -> bool:
    return environ.get(name, "").lower() in ("1", "true", "yes", "on")


@dataclass
class Config:
    """Configuration for a scan run."""

    # Directory holding the package archives
    packages_dir: Path = field(
        default_factory=lambda: Path(environ.get("PACKAGES_DIR", Path.cwd()))
    )

    # File name suffix of package archives
    extension: str = field(default_factory=lambda: environ.get("PACKAGE_EXTENSION", ".deb"))

    # Where to write the JSON results (stdout when unset)
    output: Path | None = field(default=None)

    # Raise on continuation lines that precede any field instead of dropping them
    strict: bool = field(default_factory=lambda: _env_flag("STRICT_CONTROL"))

    # Number of parallel scan workers
    jobs: int = field(default_factory=lambda: int(environ.get("j", cpu_count())))

    def __post_init__(self) -> None:
        """Initialize derived values after dataclass initialization."""
        self.packages_dir = Path(self.packages_dir)

        if self.output is None and environ.get("OUTPUT"):
            self.output = Path(environ["OUTPUT"])

    @classmethod
    def from_env(cls) -> "Config":
        """Create configuration from environment variables."""
        return cls()

    def validate(self) -> list[str]:
        """Validate configuration and return list of errors (empty if valid)."""
        errors = []

        if not self.packages_dir.is_dir():
            errors.append(f"Packages directory not found: {self.packages_dir}")

        if not self.extension.startswith("."):
            errors.append(f"Invalid package extension: {self.extension} (expected '.ext')")

        if self.jobs < 1:
            errors.append(f"Invalid job count: {self.jobs}")

        return errors
