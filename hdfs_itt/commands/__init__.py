from .cli import cli as cli
from . import cluster as cluster
from . import phases as phases
