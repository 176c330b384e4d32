"""
Persisted key=value configuration file with transactional updates
"""

import io
import logging
import os
import re
import tempfile
import threading
from contextlib import contextmanager
from typing import Dict, Iterator, List, Optional

from dotenv import dotenv_values

logger = logging.getLogger('token_agent')

CONTROL_CHARS = re.compile(r'[\x00-\x1f\x7f]')
PLAIN_VALUE = re.compile(r'[A-Za-z0-9_.,:/@+\-]*')


def format_value(value: str) -> str:
    """Render a value so dotenv reads it back unchanged

    Simple values stay bare; anything with spaces, '#' or quotes is
    double-quoted with backslashes and quotes escaped.
    """
    if PLAIN_VALUE.fullmatch(value):
        return value
    escaped = value.replace('\\', '\\\\').replace('"', '\\"')
    return f'"{escaped}"'


class EnvDocument:
    """In-memory view of the configuration file during one transaction"""

    def __init__(self, text: str):
        self.lines: List[str] = text.splitlines()
        self.trailing_newline = text.endswith('\n') or not text
        self.values: Dict[str, Optional[str]] = dict(dotenv_values(stream=io.StringIO(text), interpolate=False))
        self.dirty = False

    def get(self, key: str) -> Optional[str]:
        return self.values.get(key)

    def set(self, key: str, value) -> None:
        """Replace the first KEY= line, or append one if the key is absent"""
        value = str(value)
        if CONTROL_CHARS.search(value):
            raise ValueError(f"Value for {key} must not contain line breaks or control characters")
        new_line = f"{key}={format_value(value)}"
        prefix = f"{key}="
        for index, line in enumerate(self.lines):
            if line.startswith(prefix):
                if line != new_line:
                    self.lines[index] = new_line
                    self.dirty = True
                break
        else:
            self.lines.append(new_line)
            self.dirty = True
        self.values[key] = value

    def render(self) -> str:
        text = '\n'.join(self.lines)
        if self.trailing_newline and self.lines:
            text += '\n'
        return text


class EnvFileStore:
    """Handle on the persisted configuration file

    All reads and writes go through ``transaction()``, which holds a lock for
    the whole read-modify-write cycle and only writes when the block exits
    cleanly.
    """

    def __init__(self, path: str = '.env'):
        self.path = path
        self._lock = threading.Lock()

    def read(self) -> Dict[str, Optional[str]]:
        """Current values without modifying the file"""
        with self._lock:
            return dict(self._load().values)

    @contextmanager
    def transaction(self) -> Iterator[EnvDocument]:
        with self._lock:
            document = self._load()
            yield document
            if document.dirty:
                self._write(document.render())

    def _load(self) -> EnvDocument:
        try:
            with open(self.path, 'r', encoding='utf-8') as f:
                text = f.read()
        except FileNotFoundError:
            logger.info(f"Config file {self.path} not found, starting from empty")
            text = ''
        return EnvDocument(text)

    def _write(self, text: str) -> None:
        directory = os.path.dirname(os.path.abspath(self.path))
        fd, tmp_path = tempfile.mkstemp(prefix='.env.', dir=directory)
        try:
            with os.fdopen(fd, 'w', encoding='utf-8', newline='') as f:
                f.write(text)
            os.replace(tmp_path, self.path)
        except BaseException:
            if os.path.exists(tmp_path):
                os.unlink(tmp_path)
            raise
        logger.debug(f"Wrote config file {self.path}")
