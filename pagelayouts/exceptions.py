from typing import Sequence


class PageLayoutsError(Exception):
    # base exception for all application-specific errors.
    pass

class ConfigError(PageLayoutsError):
    # errors related to configuration.
    pass

class MetadataError(PageLayoutsError):
    # malformed front matter in a source file.
    pass

class MetadataTypeError(MetadataError):
    # a metadata key holds a value of the wrong type.
    pass

class TemplateError(PageLayoutsError):
    # errors related to template compilation or rendering.
    pass

class TemplateSyntaxError(TemplateError):
    # a template body could not be compiled.
    pass

class TemplateExecutionError(TemplateError):
    # a compiled template failed while rendering.
    pass

class LayoutNotFoundError(PageLayoutsError):
    # a layout chain references a layout that was never registered.
    def __init__(self, name: str):
        self.name = name
        super().__init__(f"layout {name!r} not found")

class LayoutCycleError(PageLayoutsError):
    # a layout chain refers back to a layout already in the chain.
    def __init__(self, chain: Sequence[str]):
        self.chain = list(chain)
        super().__init__(f"layout cycle detected: {' -> '.join(self.chain)}")

class OutputError(PageLayoutsError):
    # errors during output operations.
    pass
