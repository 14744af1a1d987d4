from hdfs_itt.commands import cli


if __name__ == "__main__":
    cli()
