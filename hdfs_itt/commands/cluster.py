import sys

import click

from hdfs_itt.errors import ITTError
from hdfs_itt.lifecycle import RunState

from .cli import FATAL_EXIT_CODE, CLIContext, cli, run_phase


@cli.command(name="c-exec", help="Execute a command on the first VM or container.")
@click.argument("command", nargs=-1, required=True)
@click.pass_obj
def c_exec(context: CLIContext, command: tuple[str, ...]):
    output = run_phase(
        context,
        lambda controller: controller.provisioner.exec(1, " ".join(command)),
    )

    click.echo(output, nl=False)


@cli.command(name="c-up", help="Bring the cluster up.")
@click.pass_obj
def c_up(context: CLIContext):
    run_phase(context, lambda controller: controller.provisioner.up())


@cli.command(name="c-dn", help="Suspend the cluster.")
@click.pass_obj
def c_dn(context: CLIContext):
    run_phase(context, lambda controller: controller.provisioner.down())


@cli.command(name="c-ssh", help="Open a shell on the cluster.")
@click.pass_obj
def c_ssh(context: CLIContext):
    run_phase(context, lambda controller: controller.provisioner.ssh())


@cli.command(help="Show the last lifecycle state recorded in the working directory.")
@click.pass_obj
def status(context: CLIContext):
    try:
        config = context.config()

    except ITTError as err:
        click.echo(str(err), err=True)
        sys.exit(FATAL_EXIT_CODE)

    run_state = RunState.load(config.working_directory)

    click.echo(f"state: {run_state.state.value}")
    if run_state.phase:
        click.echo(f"phase: {run_state.phase}")

    if run_state.updated_at:
        click.echo(f"updated: {run_state.updated_at}")

    if run_state.error:
        click.echo(f"error: {run_state.error}")
