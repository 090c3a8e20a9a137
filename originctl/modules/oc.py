"""Thin wrapper around the oc and oadm command-line tools."""
import logging
from pathlib import Path
from typing import List, Optional

from originctl.modules.runner import CommandRunner

logger = logging.getLogger("originctl.oc")


class OcClient:
    """Invokes oc / oadm with the cluster admin kubeconfig."""

    def __init__(self, runner: CommandRunner, kubeconfig: str, bin_dir: Optional[str] = None):
        self.runner = runner
        self.kubeconfig = kubeconfig
        self.bin_dir = bin_dir

    def _binary(self, name: str) -> str:
        if self.bin_dir:
            path = Path(self.bin_dir) / name
            if path.exists():
                return str(path)
        return name

    def _cmd(self, binary: str, args: List[str], namespace: Optional[str]) -> List[str]:
        cmd = [self._binary(binary), *args]
        if namespace:
            cmd += ["-n", namespace]
        cmd.append(f"--config={self.kubeconfig}")
        return cmd

    def oc(self, *args: str, namespace: Optional[str] = None, input: Optional[str] = None):
        return self.runner.run(self._cmd("oc", list(args), namespace), input=input)

    def oadm(self, *args: str, namespace: Optional[str] = None):
        return self.runner.run(self._cmd("oadm", list(args), namespace))

    def oc_output(self, *args: str, namespace: Optional[str] = None) -> str:
        return self.runner.output(self._cmd("oc", list(args), namespace))

    def exists(self, kind: str, name: str, namespace: Optional[str] = None) -> bool:
        """Return True if `oc get <kind> <name>` finds the object."""
        return self.runner.succeeds(self._cmd("oc", ["get", kind, name], namespace))
