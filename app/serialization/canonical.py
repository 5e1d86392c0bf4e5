from typing import Any, Callable, List, Optional, Union
import json
import logging

from crdt import GrowOnlySet
from error_handling import DecodeError

logger = logging.getLogger(__name__)

DUPLICATE_POLICIES = ('deduplicate', 'reject')


def _identity(value: Any) -> Any:
    return value


class GSetSerializer:
    """
    Encodes a GrowOnlySet as an ordered JSON array of its elements and back.

    The encoded form carries nothing but the elements, sorted by element
    order. Element conversion is delegated to element_encoder and
    element_decoder, which default to passing JSON-native values through.
    """

    def __init__(self, element_encoder: Optional[Callable[[Any], Any]] = None,
                 element_decoder: Optional[Callable[[Any], Any]] = None,
                 duplicate_policy: str = 'deduplicate'):
        if duplicate_policy not in DUPLICATE_POLICIES:
            raise ValueError(f"Invalid duplicate policy: {duplicate_policy}. Must be one of {list(DUPLICATE_POLICIES)}")
        self.element_encoder = element_encoder or _identity
        self.element_decoder = element_decoder or _identity
        self.duplicate_policy = duplicate_policy

    def to_list(self, gset: GrowOnlySet) -> List[Any]:
        """
        Convert a set to its list form.

        Args:
            gset: The set to convert

        Returns:
            list: Encoded elements in element order
        """
        return [self.element_encoder(element) for element in gset.elements()]

    def from_list(self, items: Any) -> GrowOnlySet:
        """
        Rebuild a set from its list form.

        Args:
            items: Encoded elements, as produced by to_list

        Returns:
            GrowOnlySet: The reconstructed set

        Raises:
            DecodeError: If the input is not a list, an element fails to
                decode, or a duplicate is found under the 'reject' policy
        """
        if not isinstance(items, list):
            raise self._fail(f"Expected a list of elements, got {type(items).__name__}")

        decoded = set()
        for index, item in enumerate(items):
            try:
                element = self.element_decoder(item)
            except Exception as e:
                raise self._fail(f"Element {index} could not be decoded: {e}", index=index) from e
            try:
                duplicate = element in decoded
            except TypeError as e:
                raise self._fail(f"Element {index} is not hashable: {e}", index=index) from e
            if duplicate and self.duplicate_policy == 'reject':
                raise self._fail(f"Duplicate element at position {index}", index=index)
            decoded.add(element)

        try:
            ordered = sorted(decoded)
        except TypeError as e:
            raise self._fail(f"Elements are not mutually ordered: {e}") from e

        # Only build the set once every element is known good.
        return GrowOnlySet(ordered)

    def serialize(self, gset: GrowOnlySet) -> str:
        """
        Serialize a set to canonical JSON.

        Args:
            gset: The set to serialize

        Returns:
            str: The canonical JSON string
        """
        return json.dumps(self.to_list(gset), sort_keys=True, separators=(',', ':'))

    def deserialize(self, payload: Union[str, bytes, bytearray]) -> GrowOnlySet:
        """
        Parse canonical JSON back into a set.

        Args:
            payload: JSON text or UTF-8 bytes

        Returns:
            GrowOnlySet: The decoded set

        Raises:
            DecodeError: On malformed or truncated JSON, or any from_list failure
        """
        if not isinstance(payload, (str, bytes, bytearray)):
            raise self._fail(f"Expected str or bytes payload, got {type(payload).__name__}")
        try:
            items = json.loads(payload)
        except (ValueError, RecursionError) as e:
            raise self._fail(f"Malformed encoded set: {e}") from e
        return self.from_list(items)

    @staticmethod
    def _fail(message: str, **context) -> DecodeError:
        logger.warning(f"Decode failed: {message}")
        return DecodeError(message, context=context)


_default_serializer = GSetSerializer()


def encode_gset(gset: GrowOnlySet) -> str:
    """Encode a set with the default serializer."""
    return _default_serializer.serialize(gset)


def decode_gset(payload: Union[str, bytes, bytearray]) -> GrowOnlySet:
    """Decode a set with the default serializer."""
    return _default_serializer.deserialize(payload)
