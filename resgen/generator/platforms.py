"""Per-target capability providers.

A ``PlatformResourceGenerator`` is pure data: Jinja2 expression templates
for the initializer of each category, plus the imports and the container
level declarations a target injects before and after the properties.  The
generic machinery renders them; it never knows which target it is serving.

Template context:

* ``m`` -- the resource metadata (initializers only)
* ``key`` -- the generated property identifier (initializers only)
* ``resources`` -- every resource of the category (hooks only)
* ``root`` -- name of the top-level generated object
* ``package`` -- package of the generated sources
* ``modifier`` -- member modifier for the current pass (``"actual "`` or ``""``)
"""

from __future__ import annotations

from dataclasses import dataclass, field
from functools import lru_cache
from typing import Any, Mapping, Sequence

from jinja2 import Environment, StrictUndefined, Template

from resgen.errors import GenerationError
from resgen.generator.properties import RUNTIME_PACKAGE, property_generator_for
from resgen.metadata.models import ResourceMetadata, ResourceType


# ---------------------------------------------------------------------------
# Expression rendering
# ---------------------------------------------------------------------------

def _argb_filter(value: str) -> str:
    """Convert ``#RRGGBB`` / ``#RRGGBBAA`` to an ``AARRGGBB`` hex literal body."""
    digits = value.lstrip("#").upper()
    if len(digits) == 6:
        return f"FF{digits}"
    return f"{digits[6:8]}{digits[:6]}"


def _string_literal_filter(value: str) -> str:
    """Escape a value for use inside a double-quoted source literal."""
    return (
        value.replace("\\", "\\\\")
        .replace('"', '\\"')
        .replace("$", "\\$")
        .replace("\n", "\\n")
    )


_ENV = Environment(undefined=StrictUndefined, autoescape=False, keep_trailing_newline=False)
_ENV.filters["argb"] = _argb_filter
_ENV.filters["lit"] = _string_literal_filter


@lru_cache(maxsize=None)
def _compile(source: str) -> Template:
    return _ENV.from_string(source)


def render_expression(source: str, **context: Any) -> str:
    """Render one expression template with strict undefined-variable checks."""
    return _compile(source).render(**context)


# ---------------------------------------------------------------------------
# Provider
# ---------------------------------------------------------------------------

@dataclass(frozen=True)
class PlatformResourceGenerator:
    """Initializers, imports and container hooks for one compilation target."""

    target: str
    initializers: Mapping[ResourceType, str]
    imports_by_type: Mapping[ResourceType, Sequence[str]] = field(default_factory=dict)
    before_properties: Mapping[ResourceType, Sequence[str]] = field(default_factory=dict)
    after_properties: Mapping[ResourceType, Sequence[str]] = field(default_factory=dict)
    root_members: Sequence[str] = ()

    def generate_root_members(self, *, root: str, package: str = "") -> list[str]:
        """Target-only members of the top-level object that the hooks refer to."""
        return [render_expression(source, root=root, package=package) for source in self.root_members]

    def generate_initializer(
        self,
        metadata: ResourceMetadata,
        *,
        root: str,
        package: str = "",
    ) -> str:
        """Platform expression constructing the resource behind *metadata*.

        Raises:
            GenerationError: The target has no initializer for the category.
        """
        resource_type = ResourceType(metadata.resource_type)
        source = self.initializers.get(resource_type)
        if source is None:
            raise GenerationError(
                f"target {self.target!r} cannot initialize {resource_type.value} resources",
                resource_type,
            )
        key = property_generator_for(resource_type).property_name(metadata)
        return render_expression(source, m=metadata, key=key, root=root, package=package)

    def imports(self, resource_type: ResourceType, *, package: str = "") -> list[str]:
        """Imports a target container of this category needs."""
        base = property_generator_for(resource_type).imports()
        extra = [
            render_expression(line, package=package)
            for line in self.imports_by_type.get(resource_type, ())
        ]
        return base + extra

    def generate_before_properties(
        self,
        resource_type: ResourceType,
        resources: Sequence[ResourceMetadata],
        *,
        root: str,
        package: str = "",
        modifier: str = "",
    ) -> list[str]:
        return self._render_hooks(self.before_properties, resource_type, resources,
                                  root=root, package=package, modifier=modifier)

    def generate_after_properties(
        self,
        resource_type: ResourceType,
        resources: Sequence[ResourceMetadata],
        *,
        root: str,
        package: str = "",
        modifier: str = "",
    ) -> list[str]:
        return self._render_hooks(self.after_properties, resource_type, resources,
                                  root=root, package=package, modifier=modifier)

    @staticmethod
    def _render_hooks(
        hooks: Mapping[ResourceType, Sequence[str]],
        resource_type: ResourceType,
        resources: Sequence[ResourceMetadata],
        **context: Any,
    ) -> list[str]:
        return [
            render_expression(source, resources=list(resources), **context)
            for source in hooks.get(resource_type, ())
        ]


# ---------------------------------------------------------------------------
# Built-in targets
# ---------------------------------------------------------------------------

_ALL_TYPES = tuple(ResourceType)
_LOCALIZED_TYPES = (ResourceType.STRING, ResourceType.PLURAL)

JVM = PlatformResourceGenerator(
    target="jvm",
    initializers={
        ResourceType.STRING: 'StringResource(resourcesClassLoader = resourcesClassLoader, bundleName = BUNDLE_NAME, key = "{{ m.key|lit }}")',
        ResourceType.PLURAL: 'PluralsResource(resourcesClassLoader = resourcesClassLoader, bundleName = BUNDLE_NAME, key = "{{ m.key|lit }}")',
        ResourceType.IMAGE: 'ImageResource(resourcesClassLoader = resourcesClassLoader, filePath = "images/{{ m.file_name|lit }}")',
        ResourceType.FONT: 'FontResource(resourcesClassLoader = resourcesClassLoader, filePath = "fonts/{{ m.file_name|lit }}")',
        ResourceType.COLOR: "ColorResource(lightColor = Color(0x{{ m.light|argb }}), darkColor = Color(0x{{ (m.dark or m.light)|argb }}))",
        ResourceType.ASSET: 'AssetResource(resourcesClassLoader = resourcesClassLoader, filePath = "assets/{{ m.path|lit }}")',
        ResourceType.FILE: 'FileResource(resourcesClassLoader = resourcesClassLoader, filePath = "files/{{ m.path|lit }}")',
    },
    imports_by_type={ResourceType.COLOR: (f"{RUNTIME_PACKAGE}.graphics.Color",)},
    root_members=("val resourcesClassLoader: ClassLoader get() = {{ root }}::class.java.classLoader",),
    before_properties={
        **{
            t: ("{{ modifier }}override val resourcesClassLoader: ClassLoader get() = {{ root }}.resourcesClassLoader",)
            for t in _ALL_TYPES
            if t is not ResourceType.COLOR
        },
        **{
            t: (
                "{{ modifier }}override val resourcesClassLoader: ClassLoader get() = {{ root }}.resourcesClassLoader",
                'private const val BUNDLE_NAME: String = "localization/{{ root }}Strings"',
            )
            for t in _LOCALIZED_TYPES
        },
    },
)

ANDROID = PlatformResourceGenerator(
    target="android",
    initializers={
        ResourceType.STRING: "StringResource(R.string.{{ key }})",
        ResourceType.PLURAL: "PluralsResource(R.plurals.{{ key }})",
        ResourceType.IMAGE: "ImageResource(R.drawable.{{ key }})",
        ResourceType.FONT: "FontResource(fontResourceId = R.font.{{ key }})",
        ResourceType.COLOR: "ColorResource(resourceId = R.color.{{ key }})",
        ResourceType.ASSET: 'AssetResource(path = "{{ m.path|lit }}")',
        ResourceType.FILE: "FileResource(rawResId = R.raw.{{ key }})",
    },
    imports_by_type={t: ("{{ package }}.R",) for t in _ALL_TYPES if t is not ResourceType.ASSET},
)

APPLE = PlatformResourceGenerator(
    target="apple",
    initializers={
        ResourceType.STRING: 'StringResource(resourceId = "{{ m.key|lit }}", bundle = nsBundle)',
        ResourceType.PLURAL: 'PluralsResource(resourceId = "{{ m.key|lit }}", bundle = nsBundle)',
        ResourceType.IMAGE: 'ImageResource(assetImageName = "{{ m.key|lit }}", bundle = nsBundle)',
        ResourceType.FONT: 'FontResource(fontName = "{{ m.file_name|lit }}", bundle = nsBundle)',
        ResourceType.COLOR: 'ColorResource(resourceId = "{{ m.key|lit }}", bundle = nsBundle)',
        ResourceType.ASSET: 'AssetResource(originalPath = "{{ m.path|lit }}", rawPath = "assets/{{ m.path|lit }}", bundle = nsBundle)',
        ResourceType.FILE: 'FileResource(fileName = "{{ m.file_name|lit }}", path = "files/{{ m.path|lit }}", bundle = nsBundle)',
    },
    imports_by_type={t: ("platform.Foundation.NSBundle",) for t in _ALL_TYPES},
    root_members=("val nsBundle: NSBundle by lazy { NSBundle.mainBundle }",),
    before_properties={
        t: ("{{ modifier }}override val nsBundle: NSBundle get() = {{ root }}.nsBundle",)
        for t in _ALL_TYPES
    },
)

JS = PlatformResourceGenerator(
    target="js",
    initializers={
        ResourceType.STRING: 'StringResource(key = "{{ m.key|lit }}", loader = stringsLoader)',
        ResourceType.PLURAL: 'PluralsResource(key = "{{ m.key|lit }}", loader = stringsLoader)',
        ResourceType.IMAGE: 'ImageResource(fileUrl = "images/{{ m.file_name|lit }}", fileName = "{{ m.file_name|lit }}")',
        ResourceType.FONT: 'FontResource(fileUrl = "fonts/{{ m.file_name|lit }}", fontFamily = "{{ (m.family or m.key)|lit }}")',
        ResourceType.COLOR: "ColorResource(lightColor = Color(0x{{ m.light|argb }}), darkColor = Color(0x{{ (m.dark or m.light)|argb }}))",
        ResourceType.ASSET: 'AssetResource(originalPath = "{{ m.path|lit }}", fileUrl = "assets/{{ m.path|lit }}")',
        ResourceType.FILE: 'FileResource(fileUrl = "files/{{ m.path|lit }}")',
    },
    imports_by_type={
        ResourceType.COLOR: (f"{RUNTIME_PACKAGE}.graphics.Color",),
        **{t: (f"{RUNTIME_PACKAGE}.provider.RemoteJsStringLoader",) for t in _LOCALIZED_TYPES},
    },
    root_members=('val stringsLoader: RemoteJsStringLoader = RemoteJsStringLoader("localization/{{ root }}Strings")',),
    before_properties={
        t: ("{{ modifier }}override val stringsLoader: RemoteJsStringLoader get() = {{ root }}.stringsLoader",)
        for t in _LOCALIZED_TYPES
    },
    after_properties={
        t: ("// {{ resources|length }} localized keys are fetched lazily by stringsLoader",)
        for t in _LOCALIZED_TYPES
    },
)

PLATFORMS: dict[str, PlatformResourceGenerator] = {
    platform.target: platform for platform in (JVM, ANDROID, APPLE, JS)
}


def get_platform(target: str) -> PlatformResourceGenerator:
    """Look up a built-in target by name.

    Raises:
        KeyError: With the list of known targets, if *target* is unknown.
    """
    try:
        return PLATFORMS[target]
    except KeyError:
        known = ", ".join(sorted(PLATFORMS))
        raise KeyError(f"Unknown target {target!r} (known: {known})") from None
