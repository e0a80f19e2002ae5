"""
Resource Registry for crudpipe.

Maps model names to the route names they are served under. The table
is built once at configuration time; resolving a URL is a lookup per
path segment.
"""
from __future__ import annotations

import logging
from dataclasses import dataclass

logger = logging.getLogger(__name__)


def ensure_camel_case(name: str) -> str:
    """Lower-case the first character: "BlogPost" -> "blogPost"."""
    return f"{name[:1].lower()}{name[1:]}"


class ResourceNotFoundError(KeyError):
    """Raised when no route name is registered for a model."""

    def __init__(self, model_name: str, available: list[str]):
        self.model_name = model_name
        self.available = available
        super().__init__(
            f"No resource registered for model: {model_name}. "
            f"Available: {', '.join(available) or '(none)'}"
        )

    def __str__(self) -> str:
        return str(self.args[0])


@dataclass(frozen=True, slots=True)
class ResolvedResource:
    """
    Resource addressed by a URL.

    `segment` is the path segment that matched: the route name itself or
    its camel-case form. Classify the request against it.
    """

    model_name: str
    resource_name: str
    segment: str = ""

    def __post_init__(self) -> None:
        if not self.segment:
            object.__setattr__(self, "segment", self.resource_name)


class ResourceRegistry:
    """
    Explicit model-name to route-name table.

    Example:
        registry = ResourceRegistry({"User": "users", "BlogPost": "BlogPosts"})
        registry.resolve("/api/blogPosts/3?include=author")
        # ResolvedResource(model_name="BlogPost", resource_name="BlogPosts",
        #                  segment="blogPosts")
    """

    def __init__(self, models: dict[str, str] | None = None) -> None:
        self._routes: dict[str, str] = {}
        # segment -> owning models, most recent registration last
        self._segments: dict[str, list[str]] = {}
        for model_name, resource_name in (models or {}).items():
            self.register(model_name, resource_name)

    def register(self, model_name: str, resource_name: str) -> None:
        """
        Register the route name a model is served under.

        Note:
            Registering a model again replaces its previous route name.
            A segment shared with another model resolves to the most
            recent registration and falls back when it is removed.
        """
        if model_name in self._routes:
            logger.warning(f"Replacing existing resource for model: {model_name}")
            self._drop_segments(model_name)

        self._routes[model_name] = resource_name
        for segment in dict.fromkeys((resource_name, ensure_camel_case(resource_name))):
            owners = self._segments.setdefault(segment, [])
            if owners:
                logger.warning(
                    f"Route segment '{segment}' of model {model_name} "
                    f"shadows model {owners[-1]}"
                )
            owners.append(model_name)
        logger.info(f"Registered resource: {model_name} -> /{resource_name}")

    def get_resource_name(self, model_name: str) -> str:
        """
        Get the route name for a model.

        Raises:
            ResourceNotFoundError: If the model is not registered
        """
        resource_name = self._routes.get(model_name)
        if resource_name is None:
            raise ResourceNotFoundError(model_name, self.models)
        return resource_name

    def has(self, model_name: str) -> bool:
        """Check if a model is registered."""
        return model_name in self._routes

    @property
    def models(self) -> list[str]:
        """Registered model names in registration order."""
        return list(self._routes.keys())

    def resolve(self, url: str) -> ResolvedResource | None:
        """
        Find the resource a URL addresses.

        Path segments are scanned left to right; the first one matching a
        route name (or its camel-case form) wins. The query string is
        ignored.

        Returns:
            ResolvedResource, or None if no segment matches
        """
        path = url.split("?")[0]
        for segment in path.split("/"):
            owners = self._segments.get(segment)
            if owners:
                model_name = owners[-1]
                return ResolvedResource(model_name, self._routes[model_name], segment)
        return None

    def unregister(self, model_name: str) -> bool:
        """
        Unregister a model.

        Returns:
            True if the model was removed, False if not found
        """
        if model_name not in self._routes:
            return False
        self._drop_segments(model_name)
        del self._routes[model_name]
        logger.info(f"Unregistered resource: {model_name}")
        return True

    def clear(self) -> None:
        """Clear all registered resources (for testing)."""
        self._routes.clear()
        self._segments.clear()

    def _drop_segments(self, model_name: str) -> None:
        for segment in list(self._segments):
            owners = [m for m in self._segments[segment] if m != model_name]
            if owners:
                self._segments[segment] = owners
            else:
                del self._segments[segment]
