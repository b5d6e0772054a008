"""Compiler capability consumed by the ingestion pipeline"""

from typing import Awaitable, Mapping, Protocol, Union, runtime_checkable

from appingest.core.packages.models import PackageManifest, SourceFile

CompileOutput = Union[Mapping[str, SourceFile], Awaitable[Mapping[str, SourceFile]]]


@runtime_checkable
class AppCompiler(Protocol):
    """Turns collected sources into sources carrying compiled output

    Implementations receive a fresh mapping and must return a new mapping
    with the same keys, each file's ``compiled`` field set (see
    ``SourceFile.with_compiled``). Failures should be raised as
    ``CompilationError`` subclasses; the pipeline does not wrap them.
    The call may be a coroutine.
    """

    def compile(self, manifest: PackageManifest, sources: Mapping[str, SourceFile]) -> CompileOutput:
        ...
