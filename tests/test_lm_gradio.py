import numpy as np

from charlm.lm_gradio import LanguageModel_gradio


def test_learn_and_generate():
    ui = LanguageModel_gradio(window_length=1)
    assert ui.learn_text("") == "ℹ️ Nothing to learn."
    assert "2 windows" in ui.learn_text("ababab")
    ui.set_generate_length(3)
    assert ui.generate_from_memory("a") == "abab"
    assert ui.generate_from_memory(None) == ""


def test_open_text_files(tmp_path):
    path = tmp_path / "corpus.txt"
    path.write_text("ababab", encoding="utf-8")
    ui = LanguageModel_gradio(window_length=1)
    assert "1 file(s), 2 windows" in ui.open_text_files([str(path)])
    assert ui.open_text_files([str(tmp_path / "missing.txt")]).startswith("❌ Error")
    assert ui.open_text_files(None) == "ℹ️ No file selected."


def test_changing_parameters_resets_the_model():
    ui = LanguageModel_gradio(window_length=1)
    ui.learn_text("ababab")
    assert ui.set_window_length(1).startswith("ℹ️")
    assert len(ui.lm) == 2
    ui.set_window_length(2)
    assert ui.lm.window_length == 2 and len(ui.lm) == 0
    ui.set_mode("Random")
    assert ui.lm.seed is None
    ui.set_mode("Fixed seed")
    assert ui.lm.seed == 20


def test_structure_and_distribution_image():
    ui = LanguageModel_gradio(window_length=1)
    ui.learn_text("abacab\n")
    assert "windows: 3" in ui.show_model_structure()
    image = ui.generate_distribution_image("a")
    assert isinstance(image, np.ndarray)
    assert image.ndim == 3 and image.shape[2] == 3
    assert ui.generate_distribution_image("z") is None


def test_undecodable_file_is_reported_and_nothing_is_learned(tmp_path):
    good = tmp_path / "good.txt"
    good.write_text("ababab", encoding="utf-8")
    bad = tmp_path / "bad.txt"
    bad.write_bytes(b"ab\xff\xfeab")
    ui = LanguageModel_gradio(window_length=1)
    status = ui.open_text_files([str(good), str(bad)])
    assert status.startswith("❌ Error")
    assert "Nothing learned" in status
    assert len(ui.lm) == 0
    assert ui.lm.finalized


def test_several_files_are_learned_together(tmp_path):
    first = tmp_path / "first.txt"
    first.write_text("ababab", encoding="utf-8")
    second = tmp_path / "second.txt"
    second.write_text("abc", encoding="utf-8")
    ui = LanguageModel_gradio(window_length=1)
    assert "2 file(s), 2 windows" in ui.open_text_files([str(first), str(second)])
    assert [(cd.chr, cd.count) for cd in ui.lm.get_table("b")] == [("a", 2), ("c", 1)]
    assert ui.lm.finalized


def test_text_shorter_than_window_is_not_reported_as_learned():
    ui = LanguageModel_gradio(window_length=3)
    status = ui.learn_text("abc")
    assert status.startswith("ℹ️")
    assert "nothing learned" in status
    assert len(ui.lm) == 0
    assert ui.learn_text("abcd").startswith("✅")
    assert len(ui.lm) == 1


def test_ui_and_cli_share_the_model_defaults():
    from charlm import cli
    from charlm.language_model import DEFAULT_FIXED_SEED, RANDOM_MODE
    assert cli.DEFAULT_FIXED_SEED == DEFAULT_FIXED_SEED == 20
    assert cli.RANDOM_MODE == RANDOM_MODE == "random"
    assert LanguageModel_gradio(mode=RANDOM_MODE).lm.seed is None
    assert LanguageModel_gradio().lm.seed == DEFAULT_FIXED_SEED
