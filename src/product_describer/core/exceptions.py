# -*- coding: utf-8 -*-

"""Exceptions raised by Product Describer."""


class ProductDescriberError(Exception):
    """Base exception for Product Describer errors."""

    pass


class ConfigurationError(ProductDescriberError):
    """Raised when the run configuration is invalid or incomplete."""

    pass


class DatasetError(ProductDescriberError):
    """Raised when a dataset cannot be read, parsed or opened for writing."""

    def __init__(self, path, reason: str):
        self.path = str(path)
        self.reason = reason
        super().__init__(f"{reason}: {path}")


class UnknownModelError(ProductDescriberError, KeyError):
    """Raised when a model has no entry in the pricing table."""

    def __init__(self, model: str, supported_models: list[str]):
        self.model = model
        self.supported_models = supported_models
        super().__init__(
            f"Model {model} not found in pricing data. "
            f"Supported models are: {', '.join(supported_models)}"
        )

    def __str__(self):
        # KeyError would otherwise repr() the message
        return self.args[0]


class GenerationError(ProductDescriberError):
    """Raised when the generation API returns an unusable response."""

    pass


class EmptyCompletionError(GenerationError):
    """Raised when a completion comes back without any text."""

    def __init__(self, model: str):
        self.model = model
        super().__init__(f"Model {model} returned an empty completion")
