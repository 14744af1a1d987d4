from .default_registry import build_default_suites as build_default_suites
from .mkrmdir_suite import MkRmDirSuite as MkRmDirSuite
from .read_write_suite import ReadWriteSuite as ReadWriteSuite
from .suite import Suite as Suite
from .suite_runtime import SuiteRuntime as SuiteRuntime
