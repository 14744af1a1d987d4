from typing import Dict

from .logger_context import LoggerContext


class Logger:
    def __init__(self) -> None:
        self._contexts: Dict[str, LoggerContext] = {}

    def context(
        self,
        name: str | None = None,
        template: str | None = None,
        path: str | None = None,
        nested: bool = False,
    ):
        if name is None:
            name = "default"

        if self._contexts.get(name) is None:
            self._contexts[name] = LoggerContext(
                name=name,
                template=template,
                path=path,
                nested=nested,
            )

        else:
            context = self._contexts[name]
            if template and template != context.template or path and path != context.path:
                self._contexts[name] = LoggerContext(
                    name=name,
                    template=template or context.template,
                    path=path or context.path,
                    nested=nested,
                )

            else:
                context.nested = nested

        return self._contexts[name]

    async def close(self):
        for context in self._contexts.values():
            await context.stream.close()
