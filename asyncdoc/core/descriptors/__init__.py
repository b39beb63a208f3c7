"""Type descriptors: the builder's view of payload classes."""

from asyncdoc.core.descriptors.introspection import (
    DescriptorSource,
    build_descriptor,
    default_source,
    describe,
    payload,
    register_descriptor,
    type_ref,
)
from asyncdoc.core.descriptors.models import FieldDescriptor, TypeDescriptor, TypeRef

__all__ = [
    "DescriptorSource",
    "FieldDescriptor",
    "TypeDescriptor",
    "TypeRef",
    "build_descriptor",
    "default_source",
    "describe",
    "payload",
    "register_descriptor",
    "type_ref",
]
