"""resgen source emitter -- renders generated container trees to source files.

Quick usage::

    from resgen.emitter import SourceEmitter

    emitter = SourceEmitter(package_name="com.example", object_name="MR")
    emitter.write("build/commonMain/MR.kt", result.mode, result.results, imports=result.imports)
"""

from resgen.emitter.source import SourceEmitter
from resgen.emitter.templates import TemplateRenderer

__all__ = [
    "SourceEmitter",
    "TemplateRenderer",
]
