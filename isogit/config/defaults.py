# isogit Default Configuration
# Default configuration as Python dict and YAML generator

from typing import Any

import yaml

DEFAULT_CONFIG: dict[str, Any] = {
    "ssh": {
        "proxy_script": None,
        "identity_file": None,
        "known_hosts_file": None,
        "home": None,
    },
    "clone": {
        "temp_root": None,
        "clone_timeout": 600,
        "command_timeout": 60,
    },
    "output": {
        "verbose": False,
        "colored": True,
    },
}


def generate_default_config() -> str:
    """
    Generate the default configuration file content.

    Returns:
        YAML string with comments.
    """
    header = """# isogit Configuration
# Credential-isolated git access
#
# ssh:
#   proxy_script      Script used as GIT_SSH (empty: packaged git.sh)
#   identity_file     Private key (empty: ~/.ssh/id_rsa when readable)
#   known_hosts_file  Known hosts file for host key verification
#   home              HOME directory for git commands
#
# clone:
#   temp_root         Parent of generated clones (empty: <tmp>/temp-clone)
#   clone_timeout     Seconds allowed for clone + checkout
#   command_timeout   Seconds allowed for fetch and ls-remote

"""
    body = yaml.dump(DEFAULT_CONFIG, default_flow_style=False, sort_keys=False, allow_unicode=True)
    return header + body
