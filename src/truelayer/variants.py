"""Discriminated response model: one wire shape, N mutually exclusive variants.

A *family* is declared once by subclassing ``Variant`` with the name of its
discriminator field. Each concrete *variant* subclasses the family root and
pins the discriminator to a ``Literal`` default, which is its tag:

    class Beneficiary(Variant, discriminator="type"):
        type: str | None = None

        def is_merchant_account(self) -> bool:
            return self.is_variant(MerchantAccount)

        def as_merchant_account(self) -> MerchantAccount:
            return self.as_variant(MerchantAccount)

    class MerchantAccount(Beneficiary):
        type: Literal["merchant_account"] = "merchant_account"
        merchant_account_id: str | None = None

``Beneficiary.decode(payload)`` then returns the matching variant. Every
variant must have its ``is_<tag>``/``as_<tag>`` pair on the family root;
declaring a variant without them is a ``TypeError`` at import time.
"""

from __future__ import annotations

from collections.abc import Mapping
import logging
from typing import TYPE_CHECKING, Annotated, Any, ClassVar, Self, TypeVar, cast

from pydantic import (
    BaseModel,
    BeforeValidator,
    ConfigDict,
    PrivateAttr,
    SerializeAsAny,
    ValidationError,
)

from truelayer.errors import DecodeError, TypeMismatchError

logger = logging.getLogger(__name__)

M = TypeVar("M", bound=BaseModel)
V = TypeVar("V", bound="Variant")


class Entity(BaseModel):
    """Base for every SDK data object: immutable, structural equality and repr.

    Fields absent from a payload default to *None*; unknown fields are dropped.
    """

    model_config = ConfigDict(frozen=True, extra="ignore")


class Variant(Entity):
    """Root of a tagged-union family."""

    _discriminator: ClassVar[str | None] = None
    _family: ClassVar[type[Variant] | None] = None
    _tag: ClassVar[str | None] = None
    _registry: ClassVar[dict[str, type[Variant]]] = {}
    _default_tag: ClassVar[str | None] = None

    _unrecognized_tag: str | None = PrivateAttr(default=None)

    def __init_subclass__(
        cls,
        *,
        discriminator: str | None = None,
        default: str | None = None,
        **kwargs: Any,
    ) -> None:
        # Family options are consumed in __pydantic_init_subclass__, once fields exist.
        super().__init_subclass__(**kwargs)

    @classmethod
    def __pydantic_init_subclass__(
        cls,
        *,
        discriminator: str | None = None,
        default: str | None = None,
        **kwargs: Any,
    ) -> None:
        super().__pydantic_init_subclass__(**kwargs)
        if discriminator is not None:
            if cls._family is not None:
                raise TypeError(f"{cls.__name__} is already part of a family")
            if discriminator not in cls.model_fields:
                raise TypeError(
                    f"{cls.__name__} must declare its discriminator field {discriminator!r}"
                )
            cls._discriminator = discriminator
            cls._family = cls
            cls._registry = {}
            cls._default_tag = default
            return

        family = cls._family
        if family is None:
            raise TypeError(
                f"{cls.__name__} subclasses Variant without declaring a discriminator"
            )
        field_name = cast("str", family._discriminator)
        tag = cls.model_fields[field_name].default
        if not isinstance(tag, str) or tag == family.model_fields[field_name].default:
            # Intermediate base sharing fields across variants; not a variant itself.
            return
        if tag in family._registry:
            raise TypeError(
                f"{family.__name__} tag {tag!r} is already bound to "
                f"{family._registry[tag].__name__}"
            )
        for accessor in (f"is_{tag}", f"as_{tag}"):
            if not callable(getattr(family, accessor, None)):
                raise TypeError(
                    f"{family.__name__} must define {accessor}() for variant {cls.__name__}"
                )
        cls._tag = tag
        family._registry[tag] = cls

    @classmethod
    def decode(cls, payload: Any) -> Self:
        """Decode *payload* into the variant selected by its discriminator."""
        family = cls._family
        if family is None or family._discriminator is None:
            raise TypeError(f"{cls.__name__} is not a variant family")
        return decode(
            payload,
            family._discriminator,
            family._registry,
            family._registry.get(family._default_tag) if family._default_tag else None,
            family=family.__name__,
        )

    @classmethod
    def coerce(cls, value: Any) -> Any:
        """Pydantic hook: decode mappings, pass everything else through."""
        if isinstance(value, Mapping):
            return cls.decode(value)
        return value

    @classmethod
    def registered_tags(cls) -> tuple[str, ...]:
        """Return the tags known to this family, in declaration order."""
        family = cls._family
        return tuple(family._registry) if family is not None else ()

    @property
    def variant_tag(self) -> str | None:
        """The tag of this instance's concrete variant."""
        return type(self)._tag

    @property
    def unrecognized_tag(self) -> str | None:
        """Wire tag that was replaced by the default variant, if any."""
        return self._unrecognized_tag

    def is_variant(self, variant: type[Variant]) -> bool:
        """Tag-based membership test."""
        return variant._tag is not None and type(self)._tag == variant._tag

    def as_variant(self, variant: type[V]) -> V:
        """Return *self* narrowed to *variant*, or raise ``TypeMismatchError``."""
        if not self.is_variant(variant):
            family = type(self)._family or type(self)
            actual = type(self)._tag or type(self).__name__
            raise TypeMismatchError(
                f"{family.__name__} is of type {type(self).__name__}. "
                f"Consider using as_{actual}() instead.",
                actual=actual,
                expected=variant._tag or variant.__name__,
            )
        return self  # type: ignore[return-value]


def decode(
    payload: Any,
    discriminator: str,
    registry: Mapping[str, type[V]],
    default: type[V] | None = None,
    *,
    family: str = "payload",
) -> V:
    """Decode *payload* into exactly one variant from *registry*.

    Unknown tags resolve to *default* when one is configured, otherwise
    ``DecodeError`` is raised. A missing discriminator is always an error.
    """
    for variant in registry.values():
        if isinstance(payload, variant):
            return payload
    if not isinstance(payload, Mapping):
        raise DecodeError(
            f"Cannot decode {family} from {type(payload).__name__}",
            hint="Expected a JSON object.",
            family=family,
        )
    if discriminator not in payload or payload[discriminator] is None:
        raise DecodeError(
            f"{family} payload is missing discriminator field {discriminator!r}",
            family=family,
        )

    tag = payload[discriminator]
    variant = registry.get(tag) if isinstance(tag, str) else None
    data = dict(payload)
    unrecognized: str | None = None
    if variant is None:
        if default is None:
            raise DecodeError(
                f"Unknown {family} {discriminator} {tag!r}",
                hint=f"Known values: {', '.join(sorted(registry))}.",
                family=family,
                tag=tag,
            )
        logger.warning(
            "Unknown %s %s %r, decoding as %s", family, discriminator, tag, default.__name__
        )
        variant = default
        unrecognized = str(tag)
        data[discriminator] = default._tag

    instance = decode_model(variant, data)
    if unrecognized is not None:
        instance._unrecognized_tag = unrecognized
    return instance


def decode_model(model: type[M], payload: Any) -> M:
    """Validate *payload* as *model*, surfacing failures as ``DecodeError``."""
    if isinstance(model, type) and issubclass(model, Variant) and model._tag is None:
        return model.decode(payload)  # type: ignore[return-value]
    try:
        return model.model_validate(payload)
    except ValidationError as e:
        raise DecodeError(
            f"Cannot decode {model.__name__}: {e.error_count()} invalid field(s)",
            hint=str(e),
            family=model.__name__,
        ) from e


if TYPE_CHECKING:
    Tagged = Annotated[V, ...]
else:

    class Tagged:
        """Field annotation for a polymorphic family member.

        ``beneficiary: Tagged[Beneficiary]`` decodes nested mappings through
        the family and serializes the concrete variant's full field set.
        """

        def __class_getitem__(cls, family: type[Variant]) -> Any:
            return Annotated[family, BeforeValidator(family.coerce), SerializeAsAny()]
