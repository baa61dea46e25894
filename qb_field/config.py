"""Connection configuration for QBField and its API client."""
import os
from typing import Any, Dict, Mapping, Optional

import singer
from singer import utils as singer_utils

LOGGER = singer.get_logger()

REQUIRED_CONFIG_KEYS = ["realm", "user_token"]


def load_config(path: str) -> Dict[str, Any]:
    """Reads a JSON config file and checks the required connection keys."""
    config = singer_utils.load_json(path)
    singer_utils.check_config(config, REQUIRED_CONFIG_KEYS)
    return config


def resolve_defaults(environ: Optional[Mapping[str, str]] = None) -> Dict[str, Any]:
    """
    Builds `QBField.defaults` from the process environment.
    ~~~
    Reads:
     - QB_REALM
     - QB_USERTOKEN
     - QB_TABLE_ID
    """
    environ = os.environ if environ is None else environ

    quickbase = {"realm": environ.get("QB_REALM", "")}
    if environ.get("QB_USERTOKEN"):
        quickbase["user_token"] = environ["QB_USERTOKEN"]

    defaults = {
        "quickbase": quickbase,
        "tableId": environ.get("QB_TABLE_ID", ""),
        "fid": -1,
    }
    LOGGER.debug("Resolved defaults for realm %s", quickbase["realm"])
    return defaults
