"""Checks that required request parameters are present."""

from typing import Any, Dict, Iterable, List, Mapping, Optional
import logging

from werkzeug.exceptions import BadRequest

logger = logging.getLogger(__name__)

REQUIRED_FIELDS_ARE_MISSING = 'REQUIRED_FIELDS_ARE_MISSING'


class MissingRequiredFields(BadRequest):
    """One or more required parameters are missing or blank."""

    def __init__(self, error_fields: List[str]) -> None:
        super().__init__(REQUIRED_FIELDS_ARE_MISSING)
        self.error_fields = error_fields

    def to_dict(self) -> dict:
        """Response body, with field names joined as ``"a, b, "``."""
        return {
            'errorFields': ''.join(f'{field}, ' for field in self.error_fields),
            'message': REQUIRED_FIELDS_ARE_MISSING
        }


def _is_blank(value: Any) -> bool:
    return value is None or len(str(value).strip()) == 0


def verify_required_params(required_fields: Iterable[str],
                           params: Optional[Mapping[str, Any]]) -> None:
    """
    Verify that every required field has a non-blank value.

    Parameters
    ----------
    required_fields : iterable
        Names of fields that must be present.
    params : mapping
        Parsed request body. ``None`` is treated as an empty body.

    Raises
    ------
    :class:`MissingRequiredFields`
        Raised if any field is absent, or is empty after stripping
        whitespace. Lists every such field, in the order required.

    """
    params = params or {}
    missing = [field for field in required_fields
               if _is_blank(params.get(field))]
    if missing:
        logger.debug('Missing required fields: %s', missing)
        raise MissingRequiredFields(missing)


def required_params(required_fields: List[str],
                    params: Optional[Mapping[str, Any]]) -> Dict[str, str]:
    """
    Verify required fields, and get their values as strings.

    JSON numbers (e.g. ``"age": 33``) are accepted and converted, so the
    store always sees the same text that it reads back from the database.

    Raises
    ------
    :class:`MissingRequiredFields`
        See :func:`verify_required_params`.

    """
    verify_required_params(required_fields, params)
    params = params or {}
    return {field: str(params[field]) for field in required_fields}
