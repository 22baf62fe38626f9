from pathlib import Path
from jinja2 import Environment, FileSystemLoader, StrictUndefined, select_autoescape

TEMPLATES_DIR = Path(__file__).parent

env = Environment(
    loader=FileSystemLoader(str(TEMPLATES_DIR)),
    autoescape=select_autoescape(disabled_extensions=("jinja",)),
    trim_blocks=True,
    lstrip_blocks=True,
    undefined=StrictUndefined,
)
