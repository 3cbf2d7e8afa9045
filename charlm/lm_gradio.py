"""
Copyright (c) 2025 Ynosound.
All rights reserved.

See LICENSE file in the project root for full license information.
"""

import logging

import gradio as gr
import numpy as np
import matplotlib
matplotlib.use("Agg")
import matplotlib.pyplot as plt
from matplotlib.backends.backend_agg import FigureCanvasAgg as FigureCanvas
from io import BytesIO
from PIL import Image

from charlm.corpus import CorpusReader
from charlm.language_model import DEFAULT_FIXED_SEED, RANDOM_MODE, LanguageModel

logger = logging.getLogger(__name__)


class LanguageModel_gradio:

    def __init__(self, window_length=3, mode="fixed", seed=DEFAULT_FIXED_SEED):
        self.mode = mode
        self.seed = seed
        self.generate_length = 200
        self.lm = self.new_model(window_length)

    def new_model(self, window_length):
        if self.mode == RANDOM_MODE:
            return LanguageModel(window_length)
        return LanguageModel(window_length, seed=self.seed)

    # --- MODEL PARAMETERS ---

    def set_window_length(self, window_length):
        # a different window length invalidates every table, so we start again
        window_length = int(window_length)
        if window_length == self.lm.window_length:
            return f"ℹ️ Window length is already {window_length}."
        self.lm = self.new_model(window_length)
        return f"🧽 New empty model with window length {window_length}."

    def set_mode(self, choice):
        self.mode = RANDOM_MODE if choice == "Random" else "fixed"
        self.lm = self.new_model(self.lm.window_length)
        return f"🧽 New empty model in {self.mode} mode."

    def set_generate_length(self, choice):
        self.generate_length = int(choice)

    # --- TRAINING ---

    def open_text_files(self, files):
        if not files:
            return "ℹ️ No file selected."
        text_files = [f.name if hasattr(f, "name") else str(f) for f in files]
        # every file is read before learning any, so a bad file leaves the model untouched
        readers = []
        for file_name in text_files:
            try:
                readers.append(CorpusReader(file_name))
            except (OSError, UnicodeDecodeError) as e:
                logger.warning("could not read %s: %s", file_name, e)
                return f"❌ Error: {e}. Nothing learned."
        for reader in readers:
            self.lm.learn_sequence(reader, finalize=False)
        self.lm.calculate_probabilities()
        return f"✅ Learned {len(text_files)} file(s), {len(self.lm)} windows."

    def learn_text(self, text):
        if not text:
            return "ℹ️ Nothing to learn."
        if len(text) <= self.lm.window_length:
            return f"ℹ️ Text shorter than {self.lm.window_length + 1} characters, nothing learned."
        self.lm.learn_sequence(text)
        return f"✅ Learned {len(text)} characters, {len(self.lm)} windows."

    # --- GENERATION AND DISPLAY ---

    def generate_from_memory(self, initial_text):
        return self.lm.generate(initial_text or "", self.generate_length)

    def show_model_structure(self):
        structure = self.lm.show_table_structure()
        return "\n".join(f"{key}: {value}" for key, value in structure.items())

    def generate_distribution_image(self, window, figsize=(10, 4)):
        """
        Draws the probabilities of the characters that followed a window.

        Returns:
            A NumPy array (H x W x 3) suitable for gr.Image, or None if the
            window is unknown.
        """
        table = self.lm.get_table(window)
        if table is None:
            return None
        labels = [repr(cd.chr)[1:-1] for cd in table]
        probs = np.array([cd.p for cd in table])

        fig, ax = plt.subplots(figsize=figsize)
        ax.bar(np.arange(len(probs)), probs, color="tab:blue")
        ax.set_xticks(np.arange(len(probs)))
        ax.set_xticklabels(labels)
        ax.set_ylim(0, 1)
        ax.set_xlabel("Next character")
        ax.set_ylabel("Probability")
        ax.set_title(f"Continuations of {window!r}")

        # Convert to NumPy image for gr.Image
        canvas = FigureCanvas(fig)
        buf = BytesIO()
        canvas.print_png(buf)
        buf.seek(0)
        image = Image.open(buf).convert("RGB")
        image_np = np.array(image)
        plt.close(fig)
        return image_np

    # --- BUILD GRADIO UI ---

    def launch(self):
        with gr.Blocks() as demo:
            gr.Markdown("## 🔤 Character language model")
            status_box = gr.Textbox(label="Status", lines=2)
            with gr.Tabs():
                with gr.TabItem("Training"):
                    with gr.Row():
                        window_slider = gr.Slider(minimum=1, maximum=12, step=1, value=self.lm.window_length,
                                                  label="Window length")
                        mode_choice = gr.Radio(choices=["Fixed seed", "Random"], label="Mode", value="Fixed seed")
                    file_input = gr.File(file_types=[".txt"], label="Select text file(s)", file_count="multiple")
                    load_button = gr.Button("🔄 Learn text files")
                    text_input = gr.Textbox(label="Or paste a corpus", lines=6)
                    learn_button = gr.Button("🧠 Learn text")
                    window_slider.change(fn=self.set_window_length, inputs=window_slider, outputs=status_box)
                    mode_choice.change(fn=self.set_mode, inputs=mode_choice, outputs=status_box)
                    load_button.click(fn=self.open_text_files, inputs=file_input, outputs=status_box)
                    learn_button.click(fn=self.learn_text, inputs=text_input, outputs=status_box)
                with gr.TabItem("Generation"):
                    initial_text = gr.Textbox(label="Initial text")
                    length_slider = gr.Slider(minimum=0, maximum=2000, step=10, value=self.generate_length,
                                              label="Generated length")
                    generate_button = gr.Button("🪄 Generate")
                    generated_output = gr.Textbox(label="Generated text", lines=10)
                    length_slider.change(fn=self.set_generate_length, inputs=[length_slider])
                    generate_button.click(fn=self.generate_from_memory, inputs=initial_text,
                                          outputs=generated_output)
                with gr.TabItem("Model"):
                    structure_button = gr.Button("📋 Show structure")
                    structure_output = gr.Textbox(label="Structure", lines=5)
                    window_input = gr.Textbox(label="Window")
                    distribution_output = gr.Image(label="Distribution")
                    structure_button.click(fn=self.show_model_structure, outputs=structure_output)
                    window_input.submit(fn=self.generate_distribution_image, inputs=window_input,
                                        outputs=distribution_output)
        demo.launch()


# --- LAUNCH ---
if __name__ == "__main__":
    logging.basicConfig(level=logging.INFO)
    LanguageModel_gradio().launch()
