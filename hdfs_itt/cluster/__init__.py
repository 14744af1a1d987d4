from .checksum_record import ChecksumRecord as ChecksumRecord
from .command_runner import CommandRunner as CommandRunner
from .hdfs_shell import HdfsShell as HdfsShell
from .nat_map import EntryPoint as EntryPoint, NatMap as NatMap
from .provisioners import (
    DockerProvisioner as DockerProvisioner,
    Provisioner as Provisioner,
    VagrantProvisioner as VagrantProvisioner,
    create_provisioner as create_provisioner,
)
from .topology import Topology as Topology, resolve_topology as resolve_topology
