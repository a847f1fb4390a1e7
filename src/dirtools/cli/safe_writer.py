"""Line-oriented output that stops cleanly when the reader goes away."""

import types
from pathlib import Path
from typing import Optional, TextIO, Type, Union

from dirtools.cli.signal_handler import signal_handler


class SafeWriter:
    """Writes output lines to a text stream or a file, aware of SIGPIPE and SIGINT.

    Once a signal has been received, or the stream reports a broken pipe, every further
    write raises BrokenPipeError so the producing loop can stop.

    Attributes:
        target: The stream or file path given at construction.
        stream: The text stream being written to.
    """

    def __init__(self, target: Union[TextIO, Path, str]):
        """Initialize the writer.

        Args:
            target: An open text stream (not closed by the writer) or a path to a file,
                which is created or truncated and closed again by ``close()``.
        """
        self.target = target
        self._closed = False

        if isinstance(target, (str, Path)):
            self.stream: TextIO = open(target, "w", encoding="utf-8")
            self._owns_stream = True
        else:
            self.stream = target
            self._owns_stream = False

    def write_line(self, line: str) -> None:
        """Write one line followed by a newline.

        Raises:
            BrokenPipeError: If an interrupting signal arrived or the pipe is closed.
            ValueError: If the writer has been closed.
        """
        if self._closed:
            raise ValueError("Cannot write to closed SafeWriter")

        if signal_handler.interrupted:
            raise BrokenPipeError()

        self.stream.write(line + "\n")

    def close(self) -> None:
        if self._closed:
            return

        self._closed = True
        try:
            if self._owns_stream:
                self.stream.close()
            else:
                self.stream.flush()
        except BrokenPipeError:
            pass

    def __enter__(self) -> "SafeWriter":
        return self

    def __exit__(
        self,
        exc_type: Optional[Type[BaseException]],
        exc_val: Optional[BaseException],
        exc_tb: Optional[types.TracebackType],
    ) -> None:
        try:
            self.close()
        except OSError:
            # An error from the with block takes priority over one from closing
            if exc_type is None:
                raise
