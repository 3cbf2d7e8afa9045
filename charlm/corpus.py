"""
Copyright (c) 2025 Ynosound.
All rights reserved.

See LICENSE file in the project root for full license information.
"""

import logging
from pathlib import Path

logger = logging.getLogger(__name__)


class CorpusReader:
    """Reads the characters of a text file, one at a time.

    The file is read when the reader is created, so a missing or unreadable
    file fails before any training happens."""

    def __init__(self, file_name, encoding='utf-8'):
        self.path = Path(file_name)
        with open(self.path, 'r', encoding=encoding) as file:
            self.text = file.read()
        self.position = 0
        logger.debug("read %d characters from %s", len(self.text), self.path)

    def __len__(self):
        return len(self.text)

    def __iter__(self):
        while not self.is_empty():
            yield self.read_char()

    def is_empty(self):
        return self.position >= len(self.text)

    def read_char(self):
        if self.is_empty():
            raise EOFError(f"no more characters in {self.path}")
        c = self.text[self.position]
        self.position += 1
        return c
