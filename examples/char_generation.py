"""
Copyright (c) 2025 Ynosound.
All rights reserved.

See LICENSE file in the project root for full license information.
"""

from charlm.language_model import LanguageModel

if __name__ == '__main__':
    lm = LanguageModel(7, seed=20)
    lm.train('../data/originofspecies_start.txt')
    lm.show_table_structure()
    print(lm.generate("Natural selection", 400))
