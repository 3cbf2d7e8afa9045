"""
Copyright (c) 2025 Ynosound.
All rights reserved.

See LICENSE file in the project root for full license information.
"""

import itertools
import logging

import numpy as np

from charlm.corpus import CorpusReader
from charlm.frequency_table import FrequencyTable

logger = logging.getLogger(__name__)

# mode name selecting a generator seeded from OS entropy
RANDOM_MODE = 'random'
DEFAULT_FIXED_SEED = 20


class ModelNotFinalizedError(RuntimeError):
    pass


class LanguageModel:
    def __init__(self, window_length, seed=None):
        """Fixed-order character model.

        With a seed, generating from models trained the same way gives the same
        texts (good for debugging). Without one, the generator is seeded from
        OS entropy (good for production)."""
        if window_length < 1:
            raise ValueError(f"window length must be >= 1, got {window_length}")
        self.window_length = window_length
        self.seed = seed
        self.random_generator = np.random.default_rng(seed)
        # maps windows to the frequency table of the characters that followed them
        self.char_data_map = {}
        # true when the probabilities reflect the current counts
        self.finalized = True

    def __str__(self):
        return "".join(f"{window} : {table}\n" for window, table in self.char_data_map.items())

    def __len__(self):
        return len(self.char_data_map)

    def get_table(self, window):
        return self.char_data_map.get(window)

    def train(self, file_name, finalize=True):
        """Builds the model from the text in the given file (the corpus)."""
        reader = CorpusReader(file_name)
        logger.info("training on %s (%d characters)", file_name, len(reader))
        self.learn_sequence(reader, finalize=finalize)

    def learn_sequence(self, chars, finalize=True):
        """Slides a window over chars, counting the character after each window.
        accumulates with existing counts"""
        stream = iter(chars)
        window = "".join(itertools.islice(stream, self.window_length))
        if len(window) < self.window_length:
            logger.debug("corpus shorter than the window (%d), nothing learned", self.window_length)
        else:
            for c in stream:
                table = self.char_data_map.get(window)
                if table is None:
                    table = FrequencyTable()
                    self.char_data_map[window] = table
                table.update(c)
                self.finalized = False
                window = window[1:] + c
        if finalize:
            self.calculate_probabilities()

    def calculate_probabilities(self):
        for table in self.char_data_map.values():
            table.calculate_probabilities()
        self.finalized = True
        logger.info("probabilities computed for %d windows", len(self.char_data_map))

    def check_finalized(self):
        if not self.finalized:
            raise ModelNotFinalizedError("counts changed since the last call to calculate_probabilities()")

    def get_random_char(self, table):
        self.check_finalized()
        u = self.random_generator.random()
        return table.sample(u)

    def generate(self, initial_text, text_length):
        """
        Generates a random text from the probabilities learned during training.

        Args:
            initial_text: text to start with. Only its last window_length
                characters are kept. If it is shorter than the window, it is
                returned unchanged.
            text_length: the number of characters to generate

        Returns:
            the window followed by the generated characters. Generation stops
            early when the current window was never seen in training.
        """
        self.check_finalized()
        if len(initial_text) < self.window_length:
            return initial_text
        window = initial_text[-self.window_length:]
        generated_text = window
        for _ in range(text_length):
            table = self.char_data_map.get(window)
            if table is None:
                logger.debug("unknown window %r, stopping after %d characters",
                             window, len(generated_text) - self.window_length)
                break
            generated_text += self.get_random_char(table)
            window = generated_text[-self.window_length:]
        return generated_text

    def show_table_structure(self):
        sizes = [len(table) for table in self.char_data_map.values()]
        structure = {
            "windows": len(sizes),
            "observations": sum(table.total_count() for table in self.char_data_map.values()),
            "min_table_size": min(sizes, default=0),
            "max_table_size": max(sizes, default=0),
            "average_table_size": sum(sizes) / len(sizes) if sizes else 0.0,
        }
        logger.info(
            "%d windows, %d observations, table size min %d max %d avg %.2f",
            structure["windows"], structure["observations"], structure["min_table_size"],
            structure["max_table_size"], structure["average_table_size"],
        )
        return structure
