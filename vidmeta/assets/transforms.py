"""Provider transforms applied to assets on update.

A transform is any object with a ``transform(asset, props=None)`` method, or
a plain callable with that signature, returning the asset to persist.
Transforms are registered under their provider identifier, which is
normalized with ``camel_case`` so ``"vercel-blob"`` and ``"vercelBlob"``
refer to the same entry.
"""
import logging
from typing import Any, Callable, Iterator, Mapping, Protocol, Union, runtime_checkable

from vidmeta.assets.helpers import camel_case
from vidmeta.assets.schemas import Asset


@runtime_checkable
class AssetTransform(Protocol):
    def transform(self, asset: Asset, props: Any = None) -> Asset: ...


TransformFunc = Callable[[Asset, Any], Asset]
TransformLike = Union[AssetTransform, TransformFunc]


class _FunctionTransform:
    def __init__(self, func: TransformFunc):
        self._func = func

    def transform(self, asset: Asset, props: Any = None) -> Asset:
        return self._func(asset, props)


class TransformRegistry(Mapping[str, AssetTransform]):
    def __init__(self, transforms: Mapping[str, TransformLike] | None = None):
        self._transforms: dict[str, AssetTransform] = {}
        for provider, transform in (transforms or {}).items():
            self.register(provider, transform)

    def register(self, provider: str, transform: TransformLike) -> None:
        key = camel_case(provider)
        if not key:
            raise ValueError(f"invalid provider identifier: {provider!r}")
        if not isinstance(transform, AssetTransform):
            if not callable(transform):
                raise TypeError(f"transform for {provider!r} is not callable")
            transform = _FunctionTransform(transform)
        self._transforms[key] = transform

    def for_provider(self, provider: str | None) -> AssetTransform | None:
        if not provider:
            return None
        return self._transforms.get(camel_case(provider))

    def __getitem__(self, provider: str) -> AssetTransform:
        return self._transforms[camel_case(provider)]

    def __iter__(self) -> Iterator[str]:
        return iter(self._transforms)

    def __len__(self) -> int:
        return len(self._transforms)


def transform_asset(registry: TransformRegistry, asset: Asset, props: Any = None) -> Asset:
    transformer = registry.for_provider(asset.provider)
    if transformer is None:
        return asset
    logging.debug("applying %s transform to %s", camel_case(asset.provider), asset.original_file_path)
    result = transformer.transform(asset, props)
    if isinstance(result, Mapping):
        result = Asset.from_record(dict(result))
    return result
