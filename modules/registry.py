from __future__ import annotations

"""Module registry used by the resolver and the run loop.

Responsibilities:
1) Keep the ordered set of known module names.
2) Answer membership questions for module selection.
3) Describe modules (name -> signature) for listings and the API.

The registry is read-only once built. Iteration order is insertion order,
and that order is what "all modules" means everywhere else.
"""

import logging
from dataclasses import dataclass
from typing import Iterable, Iterator, Protocol


class ModuleProtocol(Protocol):
    # Minimal contract every module descriptor must satisfy.
    # Example: ModuleDescriptor("cargo", "cargo run")
    name: str
    signature: str


@dataclass(frozen=True)
class ModuleDescriptor:
    name: str
    # Shell command line the module imitates, shown before it runs.
    signature: str


class ModuleRegistry:
    def __init__(self, modules: Iterable[ModuleProtocol]) -> None:
        self._logger = logging.getLogger("genact.modules.registry")
        # Keyed by name; later duplicates replace earlier ones but keep the first position.
        self._modules: dict[str, ModuleProtocol] = {}
        for module in modules:
            self._modules[module.name] = module
        self._logger.debug("ModuleRegistry initialized with modules=%s", list(self._modules))

    def __contains__(self, name: object) -> bool:
        return name in self._modules

    def __iter__(self) -> Iterator[str]:
        return iter(self._modules)

    def __len__(self) -> int:
        return len(self._modules)

    def names(self) -> tuple[str, ...]:
        """Return all module names in registry order."""
        return tuple(self._modules)

    def get(self, name: str) -> ModuleProtocol | None:
        return self._modules.get(name)

    def describe(self) -> dict[str, str]:
        """Return module signatures for listings or debugging.

        Output example:
            {"cargo": "cargo run", "weblog": "tail -f /var/log/nginx/access.log"}
        """
        return {name: module.signature for name, module in self._modules.items()}


# Kept sorted by name, matching the listing order users see.
ALL_MODULES = ModuleRegistry(
    [
        ModuleDescriptor("ansible", "ansible-playbook -i inventory.ini site.yml"),
        ModuleDescriptor("bootlog", "dmesg -w"),
        ModuleDescriptor("botnet", "./botnet.sh"),
        ModuleDescriptor("bruteforce", "./bruteforce.sh"),
        ModuleDescriptor("cargo", "cargo run"),
        ModuleDescriptor("cc", "make"),
        ModuleDescriptor("composer", "composer install"),
        ModuleDescriptor("cryptomining", "./cryptominer.sh --gpu all --provider stratum+tcp://eu.nicehash.com:3353"),
        ModuleDescriptor("docker_build", "docker build -t image ."),
        ModuleDescriptor("docker_image_rm", "docker image rm image"),
        ModuleDescriptor("download", "wget -i downloads.txt"),
        ModuleDescriptor("julia", "julia"),
        ModuleDescriptor("kernel_compile", "make"),
        ModuleDescriptor("memdump", "memdump --host 127.0.0.1 --port 4444"),
        ModuleDescriptor("mkinitcpio", "mkinitcpio --generate /boot/initramfs-custom2.img"),
        ModuleDescriptor("rkhunter", "rkhunter --check"),
        ModuleDescriptor("simcity", "simcity --load city.sc4"),
        ModuleDescriptor("terraform", "terraform apply -auto-approve"),
        ModuleDescriptor("weblog", "tail -f /var/log/nginx/access.log"),
    ]
)
