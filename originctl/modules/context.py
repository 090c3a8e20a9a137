"""Shared state handed to every provisioning stage."""
from dataclasses import dataclass, field
from typing import Optional

from originctl.modules.markers import MarkerStore
from originctl.modules.models import ProvisionConfig
from originctl.modules.oc import OcClient
from originctl.modules.runner import CommandRunner


@dataclass
class StageContext:
    config: ProvisionConfig
    runner: CommandRunner
    markers: MarkerStore
    oc: Optional[OcClient] = field(default=None)

    def __post_init__(self):
        if self.oc is None:
            self.oc = OcClient(self.runner, self.config.admin_kubeconfig, self.config.bin_dir)

    @property
    def dry_run(self) -> bool:
        return self.runner.dry_run

    @classmethod
    def create(cls, config: ProvisionConfig, dry_run: bool = False) -> "StageContext":
        runner = CommandRunner(dry_run=dry_run)
        return cls(config=config, runner=runner, markers=MarkerStore(config.marker_dir, dry_run=dry_run))
