from hdfs_itt.cluster.command_runner import CommandRunner
from hdfs_itt.config import ITTConfig
from hdfs_itt.errors import ConfigurationError

from .docker_provisioner import DockerProvisioner as DockerProvisioner
from .provisioner import Provisioner as Provisioner
from .vagrant_provisioner import VagrantProvisioner as VagrantProvisioner


registered_provisioners: dict[str, type[Provisioner]] = {
    VagrantProvisioner.name: VagrantProvisioner,
    DockerProvisioner.name: DockerProvisioner,
}


def create_provisioner(
    config: ITTConfig,
    runner: CommandRunner,
) -> Provisioner:
    provisioner_type = registered_provisioners.get(config.provisioner)
    if provisioner_type is None:
        raise ConfigurationError(
            "Invalid PROVISIONER setting",
            provisioner=config.provisioner,
        )

    return provisioner_type(config, runner)
