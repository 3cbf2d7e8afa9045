"""
Copyright (c) 2025 Ynosound.
All rights reserved.

See LICENSE file in the project root for full license information.
"""

import argparse
import logging

from charlm.language_model import DEFAULT_FIXED_SEED, RANDOM_MODE, LanguageModel


def positive_int(value):
    number = int(value)
    if number < 1:
        raise argparse.ArgumentTypeError(f"must be >= 1, got {number}")
    return number


def non_negative_int(value):
    number = int(value)
    if number < 0:
        raise argparse.ArgumentTypeError(f"must be >= 0, got {number}")
    return number


def build_parser():
    parser = argparse.ArgumentParser(description='Generate text with a character-level Markov model.')
    parser.add_argument('window_length', type=positive_int, help='Number of characters in a window.')
    parser.add_argument('initial_text', help='Text to start from; its last window is kept.')
    parser.add_argument('generated_length', type=non_negative_int, help='Number of characters to generate.')
    parser.add_argument('mode', help=f"'{RANDOM_MODE}' for a different text at each run, anything else for a reproducible one.")
    parser.add_argument('corpus', help='Text file to train on.')
    parser.add_argument('--seed', type=int, default=DEFAULT_FIXED_SEED, help='Seed used in reproducible mode.')
    parser.add_argument('--log-level', default='WARNING',
                        choices=['DEBUG', 'INFO', 'WARNING', 'ERROR'], help='Logging level (on stderr).')
    return parser


def main(argv=None):
    args = build_parser().parse_args(argv)
    logging.basicConfig(level=args.log_level, format='%(asctime)s %(name)s %(levelname)s %(message)s')
    if args.mode == RANDOM_MODE:
        lm = LanguageModel(args.window_length)
    else:
        lm = LanguageModel(args.window_length, seed=args.seed)
    # Trains the model, creating the map.
    lm.train(args.corpus)
    lm.show_table_structure()
    print(lm.generate(args.initial_text, args.generated_length))
    return 0


if __name__ == '__main__':
    raise SystemExit(main())
