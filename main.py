"""WordScramble – build as many words as you can from a random root word.

This module wires the game together: command-line options, dictionary and
start word loading, and the two front ends (a Tkinter window and a plain
terminal loop) that drive a :class:`session.GameSession`.
"""

__version__ = "1.0.0"

import argparse
import logging
import os
import random
import sys
import tkinter as tk
from collections.abc import Callable, Sequence
from tkinter import messagebox
from typing import TextIO

from dictionary import (
    available_dictionary_codes,
    build_dictionary,
    clear_cache,
    dictionaries_root,
    primary_language,
)
from rounds import load_start_words, start_words_path
from session import GameSession
from style import (
    COLORS,
    ENTRY_WIDTH,
    LIST_HEIGHT,
    Layout,
    compute_layout,
    format_used_word,
    load_fonts,
)

RESTART_COMMAND = ":restart"
QUIT_COMMANDS = (":quit", ":q")


def _print_available_languages(root: str | None = None) -> int:
    """Print available language codes from the dictionaries submodule."""
    mapping = available_dictionary_codes(root)
    if not mapping:
        print(
            f"No dictionaries found in '{root or dictionaries_root()}'. Fetch them with "
            "'git submodule update --init --recursive' or pass --dict-folder.",
            file=sys.stderr,
        )
        return 1

    print("Available dictionaries:")
    for canonical in sorted(mapping.values(), key=str.lower):
        print(f"  {canonical}")
    return 0


def make_chooser(seed: int | None) -> Callable[[Sequence[str]], str]:
    """Return the root-word selection function, reproducible when seeded."""
    if seed is None:
        return random.choice
    return random.Random(seed).choice


def build_session(
    start_words: str,
    dict_folder: str,
    lang: str,
    *,
    seed: int | None = None,
    use_root_filters: bool = True,
) -> GameSession:
    """Load start words and dictionary, then open a game session.

    Args:
        start_words: Path to the newline-delimited root word list.
        dict_folder: Folder containing .dic and .aff files.
        lang: Language code (e.g., 'en').
        seed: Optional seed for reproducible root-word selection.
        use_root_filters: Whether to apply language filters to the root words.

    Returns:
        A GameSession with its first round started.

    Raises:
        WordListUnavailableError: If no root words could be loaded.
        FileNotFoundError: If the dictionary folder is missing.
        ValueError: If the dictionary holds no entries.
    """
    logger = logging.getLogger("wordscramble")
    words = load_start_words(start_words, lang, enable_filters=use_root_filters)
    max_length = max(len(w) for w in words)
    dictionary = build_dictionary(dict_folder, lang, max_length, extra_words=words)
    logger.info(
        "Dictionary backend: %s (%d words)", dictionary.backend, len(dictionary)
    )
    return GameSession(words, dictionary, lang=lang, chooser=make_chooser(seed))


def play_console(
    session: GameSession,
    read_line: Callable[[str], str] = input,
    out: TextIO | None = None,
) -> int:
    """Play in the terminal until ':quit' or end of input.

    Args:
        session: The game session to drive.
        read_line: Prompt-and-read function, ``input`` by default.
        out: Stream for game output, stdout by default.

    Returns:
        The score of the round in play when the loop ended.
    """
    out = out or sys.stdout

    def show_root(current: GameSession) -> None:
        print(
            f"Root word: {current.state.root_word.upper()}  (score {current.state.score})",
            file=out,
        )

    def on_change(current: GameSession) -> None:
        error = current.consume_error()
        if error is not None:
            print(f"{error[0]} {error[1]}", file=out)
            return
        if current.state.used_words:
            word = current.state.used_words[0]
            print(f"+{len(word)}  {word}  (score {current.state.score})", file=out)

    show_root(session)
    session.subscribe(on_change)
    try:
        while True:
            try:
                line = read_line("> ")
            except EOFError:
                break
            command = line.strip().lower()
            if command in QUIT_COMMANDS:
                break
            if command == RESTART_COMMAND:
                session.restart()
                show_root(session)
                continue
            session.submit(line)
    finally:
        session.unsubscribe(on_change)
    return session.state.score


def play_gui(session: GameSession) -> None:
    """Run the game in a Tkinter window.

    The window title and header show the root word; accepted words are
    listed newest first with their length, and every rejection pops up an
    alert with its title and message.

    Args:
        session: The game session to drive.
    """
    logger = logging.getLogger("wordscramble")

    root = tk.Tk()
    root.configure(bg=COLORS.background)

    fonts = load_fonts(root)
    layout_state: dict[str, Layout] = {"current": compute_layout(fonts.word)}

    def current_layout() -> Layout:
        return layout_state["current"]

    layout = current_layout()
    container = tk.Frame(root, bg=COLORS.background)
    container.pack(fill=tk.BOTH, expand=True, padx=layout.outer_padding)

    title_var = tk.StringVar()
    title_label = tk.Label(
        container,
        textvariable=title_var,
        fg=COLORS.title_text,
        bg=COLORS.background,
        font=fonts.title,
    )
    title_label.pack(anchor="w", pady=(layout.outer_padding, layout.title_padding_bottom))

    score_var = tk.StringVar()
    score_label = tk.Label(
        container,
        textvariable=score_var,
        fg=COLORS.score_text,
        bg=COLORS.background,
        font=fonts.body,
    )
    score_label.pack(anchor="w", pady=(0, layout.score_padding_bottom))

    entry_var = tk.StringVar()
    entry = tk.Entry(
        container,
        textvariable=entry_var,
        width=ENTRY_WIDTH,
        bg=COLORS.entry_background,
        fg=COLORS.primary_text,
        insertbackground=COLORS.primary_text,
        relief=tk.FLAT,
        font=fonts.word,
    )
    entry.pack(fill=tk.X, pady=(0, layout.entry_padding_bottom), ipady=layout.entry_internal_pady)

    used_list = tk.Listbox(
        container,
        height=LIST_HEIGHT,
        bg=COLORS.list_background,
        fg=COLORS.primary_text,
        selectbackground=COLORS.list_select,
        highlightthickness=0,
        relief=tk.FLAT,
        activestyle="none",
        font=fonts.word,
    )
    used_list.pack(fill=tk.BOTH, expand=True, pady=(0, layout.list_padding_bottom))

    footer = tk.Frame(container, bg=COLORS.background)
    footer.pack(side=tk.BOTTOM, fill=tk.X)
    restart_button = tk.Button(
        footer,
        text="New word",
        command=session.restart,
        bg=COLORS.button_bg,
        fg=COLORS.primary_text,
        activebackground=COLORS.button_active_bg,
        activeforeground=COLORS.primary_text,
        padx=layout.button_internal_padx,
        pady=layout.button_internal_pady,
        font=fonts.body,
    )
    restart_button.pack(side=tk.LEFT, pady=layout.footer_pady)
    version_label = tk.Label(
        footer,
        text=f"v{__version__}",
        fg=COLORS.footer_text,
        bg=COLORS.background,
        font=fonts.footer,
    )
    version_label.pack(side=tk.RIGHT, padx=(0, layout.footer_padx), pady=layout.footer_pady)

    def render(current: GameSession) -> None:
        """Redraw everything from the session state and show pending alerts."""
        state = current.state
        root.title(f"WordScramble – {state.root_word}")
        title_var.set(state.root_word)
        score_var.set(f"Score: {state.score}")
        used_list.delete(0, tk.END)
        for word in state.used_words:
            used_list.insert(tk.END, format_used_word(word))
        error = current.consume_error()
        if error is not None:
            messagebox.showerror(error[0], error[1], parent=root)

    def on_submit(_event: object = None) -> None:
        result = session.submit(entry_var.get())
        if result.accepted or result.ignored:
            entry_var.set("")
        entry.focus_set()

    def on_resize(event) -> None:
        """Scale fonts and padding with the window size.

        Args:
            event: Tkinter configure event.
        """
        if event.widget is not root:
            return
        scale = max(1.0, min(event.width / 360, (event.height or 640) / 640))
        fonts.word.configure(size=max(14, int(14 * scale)))
        fonts.title.configure(size=max(20, int(20 * scale)))
        layout_state["current"] = compute_layout(fonts.word)
        layout_now = current_layout()
        container.pack_configure(padx=layout_now.outer_padding)
        entry.pack_configure(ipady=layout_now.entry_internal_pady)

    session.subscribe(render)
    entry.bind("<Return>", on_submit)
    root.bind("<Configure>", on_resize)
    render(session)
    entry.focus_set()
    logger.info("GUI started with root word '%s'", session.state.root_word)

    root.minsize(360, 640)
    try:
        root.mainloop()
    finally:
        session.unsubscribe(render)


def main(argv: Sequence[str] | None = None) -> None:
    """Parse arguments, load word list and dictionary, then start a front end."""
    logging.basicConfig(level=logging.INFO, format="[%(levelname)s] %(message)s")
    parser = argparse.ArgumentParser(
        description="WordScramble: make words from the letters of a root word"
    )
    parser.add_argument(
        "--lang",
        type=str,
        default="en",
        help="Language code for dictionaries and start words (default: en)",
    )
    parser.add_argument(
        "--list",
        action="store_true",
        help="List available dictionaries and exit",
    )
    parser.add_argument(
        "--dict-folder",
        metavar="PATH",
        help="Folder with .dic/.aff files to use instead of the bundled dictionaries.",
    )
    parser.add_argument(
        "--start-words",
        metavar="PATH",
        help="Newline-delimited root word list (default: start_words/<lang>.txt).",
    )
    parser.add_argument(
        "--seed",
        type=int,
        default=None,
        help="Seed for reproducible root-word selection.",
    )
    parser.add_argument(
        "--console",
        action="store_true",
        help="Play in the terminal instead of opening a window.",
    )
    parser.add_argument(
        "--disable-root-filters",
        action="store_true",
        help="Skip language-based filtering of the start word list.",
    )
    parser.add_argument(
        "--clear-cache",
        nargs="?",
        const="*",
        metavar="LANG",
        help=(
            "Delete cached dictionary word lists. Provide a language code to only "
            "remove that language's cache."
        ),
    )
    args = parser.parse_args(argv)

    logger = logging.getLogger("wordscramble")

    if args.clear_cache is not None:
        raw_lang = args.clear_cache
        lang_code = None
        if raw_lang != "*":
            lang_code = (raw_lang or "").strip().lower() or None
        clear_cache(lang_code)
        if lang_code:
            logger.info("Cleared dictionary cache for language '%s'.", lang_code)
        else:
            logger.info("Cleared dictionary caches for all languages.")
        return

    if args.list:
        raise SystemExit(_print_available_languages())

    lang_input = (args.lang or "").strip()
    lang_normalized = lang_input.lower() or "en"

    if args.dict_folder:
        dict_folder = os.path.normpath(args.dict_folder)
        if not os.path.isdir(dict_folder):
            parser.error(f"Dictionary folder '{dict_folder}' does not exist.")
    else:
        available_codes = available_dictionary_codes()
        if not available_codes:
            parser.error(
                f"No dictionaries found in '{dictionaries_root()}'. Fetch them with "
                "'git submodule update --init --recursive' or pass --dict-folder."
            )
        if lang_normalized not in available_codes:
            parser.error(
                f"Unknown language '{lang_input}'. Run with --list to see available options."
            )
        dict_folder = os.path.join(dictionaries_root(), available_codes[lang_normalized])

    start_words = args.start_words or start_words_path(primary_language(lang_normalized))
    logger.info("Using start words '%s' for language '%s'.", start_words, lang_normalized)

    try:
        session = build_session(
            start_words,
            dict_folder,
            lang_normalized,
            seed=args.seed,
            use_root_filters=not args.disable_root_filters,
        )
        if args.console:
            play_console(session)
        else:
            play_gui(session)
    except (OSError, ValueError) as e:
        print(f"Error: {e}", file=sys.stderr)
        sys.exit(1)


if __name__ == "__main__":
    main()
