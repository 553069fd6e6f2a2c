"""The renderer interface and a renderer that draws nothing."""

from __future__ import annotations

from abc import ABC, abstractmethod
from dataclasses import dataclass

__all__ = ["Renderer", "NilRenderer", "RepaintMsg"]


class Renderer(ABC):
    """Something that turns views into terminal output."""

    @abstractmethod
    def start(self) -> None:
        """Start the renderer."""

    @abstractmethod
    def stop(self) -> None:
        """Stop the renderer, rendering the final frame in the buffer, if any."""

    @abstractmethod
    def kill(self) -> None:
        """Stop the renderer without any final rendering."""

    @abstractmethod
    def write(self, view: str) -> None:
        """Hand a frame to the renderer, which outputs it at its discretion."""

    @abstractmethod
    def repaint(self) -> None:
        """Make the next render a full repaint; safe to call repeatedly."""

    @property
    @abstractmethod
    def alt_screen(self) -> bool:
        """Whether the alternate screen buffer is recorded as active."""

    @alt_screen.setter
    @abstractmethod
    def alt_screen(self, active: bool) -> None:
        """Record the alternate screen state; this does not toggle the terminal."""


class NilRenderer(Renderer):
    """A renderer that ignores everything it is given."""

    def start(self) -> None:
        pass

    def stop(self) -> None:
        pass

    def kill(self) -> None:
        pass

    def write(self, view: str) -> None:
        pass

    def repaint(self) -> None:
        pass

    @property
    def alt_screen(self) -> bool:
        return False

    @alt_screen.setter
    def alt_screen(self, active: bool) -> None:
        pass


@dataclass(frozen=True)
class RepaintMsg:
    """Forces a full repaint."""