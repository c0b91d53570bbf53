"""Configuration loading and validation."""

from __future__ import annotations

import os
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any

import yaml

from smartdiag.models import Device


@dataclass
class SmartctlConfig:
    """How smartctl is invoked."""

    binary: str = "smartctl"
    timeout_seconds: int = 60
    no_check: str = ""  # passed as -n, e.g. "standby" to avoid spin-ups


@dataclass
class DeviceConfig:
    """Single device configuration."""

    path: str
    type: str = ""  # passed as -d, e.g. "sat" or "megaraid,0"
    size_bytes: int | None = None  # read from sysfs when unset

    def to_device(self) -> Device:
        """Create the device handle for this entry."""
        if self.size_bytes is not None:
            return Device(path=self.path, type_hint=self.type or None, size_bytes=self.size_bytes)
        return Device.from_path(self.path, self.type or None)


@dataclass
class Config:
    """Root configuration."""

    smartctl: SmartctlConfig = field(default_factory=SmartctlConfig)
    devices: list[DeviceConfig] = field(default_factory=list)

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> Config:
        """Create Config from dictionary."""
        config = cls()

        if "smartctl" in data:
            smartctl_data = data["smartctl"] or {}
            config.smartctl = SmartctlConfig(
                binary=smartctl_data.get("binary", "smartctl"),
                timeout_seconds=smartctl_data.get("timeout_seconds", 60),
                no_check=smartctl_data.get("no_check", "") or "",
            )

        devices = []
        for dev in data.get("devices") or []:
            if isinstance(dev, str):
                devices.append(DeviceConfig(path=dev))
            else:
                devices.append(
                    DeviceConfig(
                        path=dev["path"],
                        type=dev.get("type", "") or "",
                        size_bytes=dev.get("size_bytes"),
                    )
                )
        config.devices = devices

        return config

    @classmethod
    def from_yaml(cls, path: str | Path) -> Config:
        """Load configuration from YAML file."""
        path = Path(path)
        if not path.exists():
            raise FileNotFoundError(f"Configuration file not found: {path}")

        with open(path) as f:
            data = yaml.safe_load(f) or {}

        return cls.from_dict(data)

    @classmethod
    def from_env(cls) -> Config:
        """Create config from environment variables."""
        config = cls()

        if binary := os.environ.get("SMARTDIAG_SMARTCTL"):
            config.smartctl.binary = binary

        if devices := os.environ.get("SMARTDIAG_DEVICES"):
            config.devices = [
                DeviceConfig(path=path.strip())
                for path in devices.split(",")
                if path.strip()
            ]

        return config


def load_config(path: str | Path | None = None) -> Config:
    """Load configuration from file or defaults."""
    if path:
        return Config.from_yaml(path)

    for candidate in [
        Path("/etc/smartdiag/config.yaml"),
        Path("config.yaml"),
    ]:
        if candidate.exists():
            return Config.from_yaml(candidate)

    return Config.from_env()
