"""Known Quickbase field attributes and the allow-lists used when saving."""
from enum import Enum


class FieldAttribute(str, Enum):
    """Attribute names returned by the Quickbase field endpoints.

    Anything else the API returns is stored as-is under its own name.
    """
    ID = "id"
    LABEL = "label"
    FIELD_TYPE = "fieldType"
    MODE = "mode"
    NO_WRAP = "noWrap"
    BOLD = "bold"
    REQUIRED = "required"
    APPEARS_BY_DEFAULT = "appearsByDefault"
    FIND_ENABLED = "findEnabled"
    UNIQUE = "unique"
    DOES_DATA_COPY = "doesDataCopy"
    FIELD_HELP = "fieldHelp"
    AUDITED = "audited"
    ADD_TO_FORMS = "addToForms"
    PROPERTIES = "properties"
    PERMISSIONS = "permissions"


# Saved on both create and update
COMMON_SAVABLE = (
    FieldAttribute.FIELD_HELP,
    FieldAttribute.PERMISSIONS,
    FieldAttribute.LABEL,
    FieldAttribute.NO_WRAP,
    FieldAttribute.BOLD,
    FieldAttribute.APPEARS_BY_DEFAULT,
    FieldAttribute.FIND_ENABLED,
    FieldAttribute.ADD_TO_FORMS,
)

CREATE_SAVABLE = COMMON_SAVABLE + (
    FieldAttribute.FIELD_TYPE,
    FieldAttribute.MODE,
    FieldAttribute.AUDITED,
)

UPDATE_SAVABLE = COMMON_SAVABLE + (
    FieldAttribute.REQUIRED,
    FieldAttribute.UNIQUE,
)

# The returned `properties` object is not round-trip safe, so it is only
# sent when a caller names it explicitly.
OPT_IN_SAVABLE = (
    FieldAttribute.PROPERTIES,
)

# Alternate spellings accepted by get/set
RENAMED_ATTRIBUTES = {
    "type": FieldAttribute.FIELD_TYPE.value,
}

USAGE_COUNTERS = (
    "actions",
    "appHomePages",
    "dashboards",
    "defaultReports",
    "exactForms",
    "fields",
    "forms",
    "notifications",
    "personalReports",
    "relationships",
    "reminders",
    "reports",
    "roles",
    "tableImports",
    "tableRules",
    "webhooks",
)


def base_usage():
    """Zeroed usage counters, as held before `load_usage` runs."""
    return {name: {"count": 0} for name in USAGE_COUNTERS}
