import click

from hdfs_itt.lifecycle import LifecycleController, PreparationDecision

from .cli import CLIContext, cli, run_phase


@cli.command(help="Upload the test file to HDFS and compute checksums and other test data.")
@click.option("--force", is_flag=True, default=False, help="Prepare even if already prepared.")
@click.pass_obj
def prepare(context: CLIContext, force: bool):
    decision = run_phase(
        context,
        lambda controller: controller.prepare(force=force),
    )

    if decision == PreparationDecision.PRESENT:
        click.echo("Already prepared, use --force to prepare again")


@cli.command(
    name="prepare-cluster-only",
    help="Partial preparation of just the cluster part, e.g. after re-creating containers.",
)
@click.pass_obj
def prepare_cluster(context: CLIContext):
    run_phase(context, LifecycleController.prepare_cluster)


@cli.command(name="create-volatile-input", help="Create volatile test input.")
@click.pass_obj
def create_test_input(context: CLIContext):
    run_phase(context, LifecycleController.create_test_input)


@cli.command(help="Validate the output of the program under test.")
@click.pass_obj
def validate(context: CLIContext):
    run_phase(context, LifecycleController.validate)
    click.echo("==================== TEST SUCCESSFUL ====================")


@cli.command(
    name="cleanup-output",
    help="Clean up test output, typically after a failed test.",
)
@click.pass_obj
def cleanup_test_output(context: CLIContext):
    run_phase(context, LifecycleController.cleanup_test_output)


@cli.command(name="cleanup-all", help="Clean up everything.")
@click.pass_obj
def cleanup(context: CLIContext):
    run_phase(context, LifecycleController.cleanup)


@cli.command(
    help="Prepare, create test input, run the program under test, validate and clean up its output.",
)
@click.pass_obj
def run(context: CLIContext):
    run_phase(context, LifecycleController.run)
    click.echo("==================== TEST SUCCESSFUL ====================")


# Aliases
cli.add_command(prepare_cluster, name="prepare-hdfs")
cli.add_command(create_test_input, name="create-test-input")
cli.add_command(cleanup_test_output, name="cleanup-test-output")
cli.add_command(cleanup, name="cleanup")
