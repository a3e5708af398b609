"""Configuration schemas.

Three input layers, one output:

- ParamConfig: expert defaults for every parameter
- UserConfig: the user's CONFIG dict, uppercase aliases welcome
- CLIConfig: flags from the command line
- InternalConfig: what runtime code receives, frozen

Use resolve_config() to combine them; initialization.init_runtime_config()
adds directories, a run ID and the persisted JSON on top.
"""

from seascape.schemas.cli import CLIConfig
from seascape.schemas.internal import InternalConfig
from seascape.schemas.param import ParamConfig
from seascape.schemas.resolve import resolve_config
from seascape.schemas.user import UserConfig

__all__ = [
    'CLIConfig',
    'InternalConfig',
    'ParamConfig',
    'UserConfig',
    'resolve_config',
]
