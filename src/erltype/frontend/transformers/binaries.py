"""
Binary Parser - Extracted from TypeTransformer
Handles bitstring segments and byte lists
"""

from typing import Sequence

from ...shared.nodes import Binary, BinaryPart, ByteList, Size, TypeNode, Wildcard


class BinaryParser:
    """Dedicated builder for bitstring nodes"""

    def part(self, value: TypeNode, size: TypeNode) -> BinaryPart:
        """``_:48`` – fixed-size segment"""
        return BinaryPart(value=value, size=size)

    def unit_part(self, value: TypeNode, unit: TypeNode) -> BinaryPart:
        """``_:_*8`` – any number of ``unit``-sized chunks"""
        return BinaryPart(value=value, size=Size(unit), qualifier=Wildcard())

    def binary(self, parts: Sequence[BinaryPart]) -> Binary:
        """
        Assemble a bitstring.

        A single fixed segment that binds a concrete value (``<<X:8>>``) is
        kept as a (value, size) pair; everything else is a part list.
        """
        if len(parts) == 1:
            only = parts[0]
            if only.qualifier is None and not isinstance(only.value, Wildcard):
                return Binary(value=only.value, size=only.size)
        return Binary(parts=tuple(parts))

    def byte_list(self, values: Sequence[int]) -> ByteList:
        return ByteList(tuple(values))
