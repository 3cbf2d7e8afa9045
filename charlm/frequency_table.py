"""
Copyright (c) 2025 Ynosound.
All rights reserved.

See LICENSE file in the project root for full license information.
"""

import numpy as np

# returned when a draw falls in the rounding gap below the last cp
FALLBACK_CHAR = ' '


class CharData:
    def __init__(self, chr):
        self.chr = chr
        # number of times chr followed the owning window
        self.count = 0
        # probability and cumulative probability, set by calculate_probabilities
        self.p = 0.0
        self.cp = 0.0

    def __str__(self):
        return f"({self.chr} {self.count} {self.p} {self.cp})"

    def __repr__(self):
        return f"({self.chr!r} {self.count} {self.p} {self.cp})"


class FrequencyTable:
    """The characters that followed one window, in first-seen order.

    The order of the observations is the scan order used by sample(), so it
    is never changed once a character is inserted."""

    def __init__(self):
        self.char_datas = []
        self.index = {}

    def __len__(self):
        return len(self.char_datas)

    def __iter__(self):
        return iter(self.char_datas)

    def __contains__(self, chr):
        return chr in self.index

    def __str__(self):
        return "(" + " ".join(str(cd) for cd in self.char_datas) + ")"

    def get(self, chr):
        return self.index.get(chr)

    def update(self, chr):
        char_data = self.index.get(chr)
        if char_data is None:
            char_data = CharData(chr)
            self.char_datas.append(char_data)
            self.index[chr] = char_data
        char_data.count += 1

    def total_count(self):
        return sum(cd.count for cd in self.char_datas)

    def calculate_probabilities(self):
        # cumsum accumulates sequentially, so cp[i] == cp[i-1] + p[i] in float64
        counts = np.array([cd.count for cd in self.char_datas], dtype=float)
        probs = counts / counts.sum()
        for char_data, p, cp in zip(self.char_datas, probs, np.cumsum(probs)):
            char_data.p = float(p)
            char_data.cp = float(cp)

    def sample(self, u):
        """Returns the first character whose cp is >= u, or FALLBACK_CHAR.

        cp is non-decreasing, so a left binary search finds the same entry as
        a linear scan in stored order."""
        cps = np.array([cd.cp for cd in self.char_datas])
        idx = int(np.searchsorted(cps, u, side='left'))
        if idx >= len(self.char_datas):
            return FALLBACK_CHAR
        return self.char_datas[idx].chr
