"""Base class for output format providers."""

from abc import ABC, abstractmethod


class OutputProvider(ABC):
    """Abstract base class for markup snapshot output providers."""

    def __init__(self, path: str = ""):
        """
        Initialize the provider with an output file path.

        Args:
            path: Path to the output file
        """
        self.path = path

    @abstractmethod
    def encode(self, markup: str) -> bytes:
        """
        Encode a rendered markup snapshot into the output format.

        Args:
            markup: Inner markup of the render container

        Returns:
            Encoded output as bytes
        """
        raise NotImplementedError

    def write(self, data: bytes) -> None:
        """
        Write encoded data to a file.

        Args:
            data: Encoded data to write
        """
        if not self.path:
            raise ValueError("Output path not set")
        with open(self.path, "wb") as f:
            f.write(data)
