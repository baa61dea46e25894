"""QBField: a local proxy for a single Quickbase field."""
import copy
import json
from typing import Any, Dict, Iterable, Mapping, Optional, Union

import singer

from qb_field.attributes import (
    CREATE_SAVABLE,
    OPT_IN_SAVABLE,
    RENAMED_ATTRIBUTES,
    UPDATE_SAVABLE,
    FieldAttribute,
    base_usage,
)
from qb_field.client import QuickBase, is_api_client
from qb_field.exceptions import QuickbaseError

LOGGER = singer.get_logger()

FIELD_NOT_FOUND = "Field: {fid} was not found."


def _attribute_name(attribute: Union[str, FieldAttribute]) -> str:
    if isinstance(attribute, FieldAttribute):
        attribute = attribute.value
    return RENAMED_ATTRIBUTES.get(attribute, attribute)


def _parse_json(value: Any) -> Mapping[str, Any]:
    if isinstance(value, (str, bytes)):
        try:
            value = json.loads(value)
        except ValueError as err:
            raise TypeError("json argument must be type of object or a valid JSON string") from err
    if not isinstance(value, Mapping):
        raise TypeError("json argument must be type of object or a valid JSON string")
    return value


class QBField:
    """
    Local mirror of a Quickbase field, kept in step through the API client.
    ~~~
    Provides:
     - Attribute bookkeeping (`get`, `set`, `clear`)
     - Remote operations (`load`, `load_usage`, `save`, `delete`)
     - Serialization (`to_json`, `from_json`)

    A field with `fid == -1` does not exist remotely yet; the first
    successful `save` creates it and stores the assigned id.
    """

    CLASS_NAME = "QBField"

    # Replace at startup, e.g. with `qb_field.config.resolve_defaults()`
    defaults = {
        "quickbase": {
            "realm": "",
        },
        "tableId": "",
        "fid": -1,
    }

    # attribute name -> (getter, setter) for values kept outside the attribute map
    _ACCESSORS = {
        "tableId": ("get_table_id", "set_table_id"),
        "fid": ("get_fid", "set_fid"),
        "id": ("get_fid", "set_fid"),
        "usage": ("get_usage", "_set_usage"),
    }

    def __init__(self, options: Optional[Mapping[str, Any]] = None) -> None:
        options = dict(options or {})
        quickbase = options.pop("quickbase", None)

        if is_api_client(quickbase):
            self._qb = quickbase
        else:
            self._qb = QuickBase({
                **self.defaults.get("quickbase", {}),
                **(quickbase or {}),
            })

        settings = {**self.defaults, **options}

        self._table_id = ""
        self._fid = -1
        self._data = {}
        self._usage = base_usage()

        self.set_table_id(settings.get("tableId", "")).set_fid(settings.get("fid", -1))

    def __repr__(self) -> str:
        return f"QBField(tableId={self._table_id!r}, fid={self._fid!r})"

    def get(self, attribute: Union[str, FieldAttribute]) -> Any:
        """Returns the attribute value, or None when it has not been set."""
        attribute = _attribute_name(attribute)
        accessor = self._ACCESSORS.get(attribute)
        if accessor:
            return getattr(self, accessor[0])()
        return self._data.get(attribute)

    def set(self, attribute: Union[str, FieldAttribute], value: Any) -> "QBField":
        """Sets `attribute` to `value` locally; nothing is sent until `save`."""
        attribute = _attribute_name(attribute)
        accessor = self._ACCESSORS.get(attribute)
        if accessor:
            getattr(self, accessor[1])(value)
        else:
            self._data[attribute] = value
        return self

    def get_table_id(self) -> str:
        return self._table_id

    def set_table_id(self, table_id: str) -> "QBField":
        self._table_id = table_id
        return self

    def get_fid(self) -> int:
        return self._fid

    def set_fid(self, fid: int) -> "QBField":
        self._fid = fid
        return self

    def get_usage(self) -> Dict[str, Any]:
        """Usage counters; zeroed until `load_usage` is called."""
        return self._usage

    def _set_usage(self, usage: Dict[str, Any]) -> None:
        self._usage = usage

    def clear(self) -> "QBField":
        """Drops every trace of the remote field but keeps the connection and table id."""
        self._fid = -1
        self._data = {}
        self._usage = base_usage()
        return self

    def load(self) -> Dict[str, Any]:
        """Loads the field attributes and permissions from Quickbase."""
        results = self._qb.get_field(self.get_table_id(), self.get_fid())
        for attribute, value in results.items():
            self.set(attribute, value)
        return self._data

    def load_usage(self) -> Dict[str, Any]:
        results = self._qb.get_field_usage(self.get_table_id(), self.get_fid())
        self._set_usage(results[0]["usage"])
        return self.get_usage()

    def save(self, attributes_to_save: Optional[Iterable[Union[str, FieldAttribute]]] = None) -> Dict[str, Any]:
        """
        Creates the field when no field id is set, otherwise updates it.
        ~~~
        Args:
         - attributes_to_save (list): restricts the saved attributes to this
           subset of the savable ones. `properties` is only ever saved when
           named here.

        Returns:
         - dict: the attribute map, refreshed from the API response.
        """
        fid = self.get_fid()
        updating = bool(fid) and fid > 0

        requested = None
        if attributes_to_save is not None:
            requested = {_attribute_name(attribute) for attribute in attributes_to_save}

        savable = UPDATE_SAVABLE if updating else CREATE_SAVABLE
        if requested:
            savable += tuple(a for a in OPT_IN_SAVABLE if a.value in requested)

        data = {"tableId": self.get_table_id()}
        label = self.get(FieldAttribute.LABEL)
        if label is not None:
            data["label"] = label

        for attribute in savable:
            name = attribute.value
            if requested is not None and name not in requested:
                continue
            value = self._data.get(name)
            if value is not None:
                data[name] = value

        if updating:
            data["fieldId"] = fid
            LOGGER.info("Updating field %s in table %s", fid, data["tableId"])
            results = self._qb.update_field(data)
        else:
            LOGGER.info("Creating field in table %s", data["tableId"])
            results = self._qb.create_field(data)

        for attribute, value in results.items():
            self.set(attribute, value)

        return self._data

    def delete(self) -> Dict[str, Any]:
        """
        Deletes the field from Quickbase, then calls `clear`.

        A field that Quickbase reports as not found counts as deleted.
        """
        fid = self.get_fid()

        if not fid:
            return self._cleared_delete_result(fid)

        try:
            results = self._qb.delete_fields(self.get_table_id(), [fid])
            errors = results.get("errors") or []
            if errors:
                raise QuickbaseError("Unable to delete field", description=errors[0])
        except QuickbaseError as err:
            if err.description == FIELD_NOT_FOUND.format(fid=fid):
                LOGGER.warning("Field %s in table %s was already deleted", fid, self.get_table_id())
                return self._cleared_delete_result(fid)
            raise

        LOGGER.info("Deleted field %s from table %s", fid, self.get_table_id())
        self.clear()
        return results

    def _cleared_delete_result(self, fid: int) -> Dict[str, Any]:
        self.clear()
        return {
            "deletedFieldIds": [fid],
            "errors": [],
        }

    def to_json(self) -> Dict[str, Any]:
        """Serializes the QBField into a JSON compatible dict."""
        # an empty config leaves the current client in place on from_json
        client_to_json = getattr(self._qb, "to_json", None)
        return {
            "connectionConfig": client_to_json() if callable(client_to_json) else {},
            "tableId": self.get_table_id(),
            "fid": self.get_fid(),
            "data": copy.deepcopy(self._data),
            "usage": copy.deepcopy(self.get_usage()),
        }

    def from_json(self, value: Union[str, Mapping[str, Any]]) -> "QBField":
        """Rebuilds this QBField from `to_json` output, or its JSON string form."""
        value = _parse_json(value)

        # `quickbase` is the key older serializations used
        connection = value.get("connectionConfig") or value.get("quickbase")
        if connection:
            self._qb = QuickBase(connection)

        if value.get("tableId") is not None:
            self.set_table_id(value["tableId"])

        if value.get("fid") is not None:
            self.set_fid(value["fid"])
        elif value.get("id") is not None:
            self.set_fid(value["id"])

        for attribute, attribute_value in (value.get("data") or {}).items():
            self.set(attribute, attribute_value)

        if value.get("usage") is not None:
            self._set_usage(value["usage"])

        return self

    @classmethod
    def create_from_json(cls, value: Union[str, Mapping[str, Any]]) -> "QBField":
        """Returns a new QBField restored from serialized JSON."""
        value = _parse_json(value)
        return cls().from_json(value)

    @classmethod
    def new_field(cls, options: Mapping[str, Any], attributes: Optional[Mapping[str, Any]] = None) -> "QBField":
        """Builds a QBField from `options` and seeds it with `attributes`, without calling the API."""
        new_field = cls(options)
        for attribute, value in (attributes or {}).items():
            new_field.set(attribute, value)
        return new_field

    @classmethod
    def is_qb_field(cls, obj: Any) -> bool:
        """Tests for a QBField by its class tag rather than by type."""
        return getattr(obj, "CLASS_NAME", None) == cls.CLASS_NAME
