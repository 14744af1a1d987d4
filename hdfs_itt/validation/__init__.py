from .read_validator import ReadValidator as ReadValidator
from .write_validator import WriteValidator as WriteValidator
