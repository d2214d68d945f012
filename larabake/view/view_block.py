"""
View Blocks
Named content buffers templates can capture, append to and fetch
"""
from typing import Dict, List, Optional, Tuple

from larabake.exceptions import FrameworkException, UnclosedBlockException


class OutputBuffer:
    """
    Stack of output sinks

    Template output is written to the innermost sink. Every evaluated
    file opens a sink for itself and every captured block opens one on
    top of it, so nested captures and nested renders stay separated.
    """

    def __init__(self):
        self._levels: List[List[str]] = []

    def start(self) -> int:
        """Open a sink and return its level (1-based)"""
        self._levels.append([])
        return len(self._levels)

    def level(self) -> int:
        return len(self._levels)

    def write(self, chunk: str):
        if not self._levels:
            raise FrameworkException("No output buffer is open.")
        self._levels[-1].append(chunk)

    def get_clean(self) -> str:
        """Close the innermost sink and return what was written to it"""
        if not self._levels:
            raise FrameworkException("No output buffer is open.")
        return ''.join(self._levels.pop())

    def end(self, level: int) -> str:
        """
        Close every sink down to `level` and return the contents of `level`

        Sinks left above `level` belong to blocks that were never ended;
        their output is dropped.
        """
        while len(self._levels) > level:
            self._levels.pop()
        return self.get_clean()

    def discard(self, level: int):
        """Drop `level` and everything above it"""
        del self._levels[level - 1:]


class ViewBlock:
    """
    Named blocks of rendered content

    Example:
        blocks.start('sidebar')
        buffer.write('<ul>...</ul>')
        blocks.end()
        blocks.get('sidebar')  # '<ul>...</ul>'
    """

    APPEND = 'append'
    PREPEND = 'prepend'

    def __init__(self, buffer: Optional[OutputBuffer] = None):
        self.buffer = buffer or OutputBuffer()
        self._blocks: Dict[str, str] = {}
        # (name, output level) of every block currently capturing
        self._active: List[Tuple[str, int]] = []

    def start(self, name: str):
        """
        Start capturing output for a block

        Raises:
            FrameworkException: The block is already capturing
        """
        if name in self.unclosed():
            raise FrameworkException(f"A view block with the name '{name}' is already/still open.")
        self._active.append((name, self.buffer.start()))

    def end(self):
        """
        Stop capturing and store the output in the most recent block

        Raises:
            FrameworkException: No block is capturing
            UnclosedBlockException: The block was started by another file
        """
        if not self._active:
            raise FrameworkException("There is no open view block to end.")

        name, level = self._active[-1]
        if self.buffer.level() != level:
            raise UnclosedBlockException(name)

        self._active.pop()
        self._blocks[name] = self.buffer.get_clean()

    def concat(self, name: str, value: str, mode: str = APPEND):
        """
        Append or prepend to a block, creating it when missing

        Example:
            blocks.set('css', '<b>')
            blocks.concat('css', '<a>', ViewBlock.PREPEND)  # '<a><b>'
        """
        value = '' if value is None else str(value)

        if name not in self._blocks:
            self._blocks[name] = value
        elif mode == self.PREPEND:
            self._blocks[name] = value + self._blocks[name]
        else:
            self._blocks[name] = self._blocks[name] + value

    def set(self, name: str, value):
        self._blocks[name] = '' if value is None else str(value)

    def get(self, name: str, default: str = '') -> str:
        return self._blocks.get(name, default)

    def exists(self, name: str) -> bool:
        return name in self._blocks

    def keys(self) -> List[str]:
        return list(self._blocks.keys())

    def active(self) -> Optional[str]:
        """Name of the innermost capturing block"""
        return self._active[-1][0] if self._active else None

    def unclosed(self) -> List[str]:
        return [name for name, _ in self._active]
