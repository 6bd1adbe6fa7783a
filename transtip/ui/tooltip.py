"""
Tooltip Manager for TransTip.
Shows translation results in a borderless popup next to the cursor and
updates it in place while output is still streaming in.
"""
import tkinter as tk
from tkinter import BOTH, X, LEFT, RIGHT, TOP, BOTTOM
from tkinter import font
from typing import Tuple, Optional, Callable

import ttkbootstrap as ttk

BG_COLOR = '#2b2b2b'
FG_COLOR = '#ffffff'


class TooltipManager:
    """Manages the translation tooltip."""

    MAX_WIDTH = 640
    MIN_WIDTH = 240
    MIN_HEIGHT = 70
    FRAME_PADDING = 24      # Total horizontal padding (12px * 2)
    TEXT_MARGIN = 10        # Extra margin for safety
    VERTICAL_PADDING = 64   # Footer (40) + padding (24)

    def __init__(self, root: tk.Tk):
        """Initialize tooltip manager.

        Args:
            root: The root Tk window for screen info and scheduling
        """
        self.root = root
        self.tooltip: Optional[tk.Toplevel] = None
        self.tooltip_text: Optional[tk.Text] = None
        self.tooltip_copy_btn: Optional[ttk.Button] = None
        self._current_text = ""

        # Screen position the tooltip is placed next to
        self._anchor_x = 0
        self._anchor_y = 0

        # Drag state
        self._drag_x = 0
        self._drag_y = 0

        self._on_copy: Optional[Callable[[str], bool]] = None
        self._font: Optional[font.Font] = None

    def configure_callbacks(self, on_copy: Optional[Callable[[str], bool]] = None):
        """Configure callback functions for tooltip actions.

        Args:
            on_copy: Called with the shown text when the user clicks Copy;
                returns True if the text reached the clipboard
        """
        self._on_copy = on_copy

    def set_anchor(self, x: int, y: int):
        """Place the next tooltip next to screen position (x, y)."""
        self._anchor_x = int(x)
        self._anchor_y = int(y)

    def capture_mouse_position(self):
        """Anchor the next tooltip at the current mouse position."""
        self.set_anchor(self.root.winfo_pointerx(), self.root.winfo_pointery())

    def _ui_font(self) -> font.Font:
        if self._font is None:
            self._font = font.nametofont('TkDefaultFont').copy()
            self._font.configure(size=11)
        return self._font

    def calculate_size(self, text: str) -> Tuple[int, int]:
        """Calculate tooltip dimensions that fit `text`.

        Args:
            text: The text to display

        Returns:
            Tuple of (width, height) in pixels
        """
        ui_font = self._ui_font()
        max_height = self.root.winfo_screenheight() - 80
        line_height = ui_font.metrics("linespace") + 2

        longest_line_width = max((ui_font.measure(line) for line in text.split('\n')), default=0)
        width = max(self.MIN_WIDTH,
                    min(longest_line_width + self.FRAME_PADDING + self.TEXT_MARGIN, self.MAX_WIDTH))

        # Estimate wrapped line count
        available = width - self.FRAME_PADDING - self.TEXT_MARGIN
        total_lines = 0
        for paragraph in text.split('\n'):
            paragraph_width = ui_font.measure(paragraph)
            total_lines += max(1, -(-paragraph_width // available))

        height = total_lines * line_height + self.VERTICAL_PADDING
        return int(width), int(min(max(height, self.MIN_HEIGHT), max_height))

    def show(self, text: str):
        """Show `text` in the tooltip, reusing the open tooltip if there is one.

        Args:
            text: Text to display
        """
        self._current_text = text
        if self.tooltip is None:
            self._create()

        width, height = self.calculate_size(text)
        self.tooltip_text.config(state='normal')
        self.tooltip_text.delete('1.0', tk.END)
        self.tooltip_text.insert('1.0', text)
        self.tooltip_text.config(state='disabled')

        x, y, height = self._calculate_position(width, height)
        self.tooltip.geometry(f"{width}x{height}+{int(x)}+{int(y)}")

    def _create(self):
        self.tooltip = tk.Toplevel(self.root)
        self.tooltip.overrideredirect(True)
        self.tooltip.configure(bg=BG_COLOR)

        # Set topmost initially, then remove so it can go behind other windows
        self.tooltip.attributes('-topmost', True)
        self.tooltip.after(100, lambda: self.tooltip.attributes('-topmost', False) if self.tooltip else None)

        main_frame = ttk.Frame(self.tooltip, padding=12)
        main_frame.pack(fill=BOTH, expand=True)
        main_frame.bind("<Button-1>", self._start_move)
        main_frame.bind("<B1-Motion>", self._on_drag)

        # Button frame first so it stays at the bottom
        btn_frame = ttk.Frame(main_frame)
        btn_frame.pack(side=BOTTOM, fill=X, pady=(8, 0))
        btn_frame.bind("<Button-1>", self._start_move)
        btn_frame.bind("<B1-Motion>", self._on_drag)

        self.tooltip_copy_btn = ttk.Button(btn_frame, text="Copy", command=self._handle_copy,
                                           width=8, bootstyle="primary")
        self.tooltip_copy_btn.pack(side=LEFT)
        ttk.Button(btn_frame, text="✕", command=self.close, width=3,
                   bootstyle="secondary").pack(side=RIGHT)

        self.tooltip_text = tk.Text(main_frame, wrap=tk.WORD, bg=BG_COLOR, fg=FG_COLOR,
                                    font=self._ui_font(), relief='flat',
                                    borderwidth=0, highlightthickness=0)
        self.tooltip_text.pack(side=TOP, fill=BOTH, expand=True)
        self.tooltip_text.bind('<MouseWheel>',
                               lambda e: self.tooltip_text.yview_scroll(int(-1 * (e.delta / 120)), "units"))

        self.tooltip.bind('<Escape>', lambda e: self.close())

    def _calculate_position(self, width: int, height: int) -> Tuple[int, int, int]:
        """Calculate tooltip position and adjust height if needed.

        Returns:
            Tuple of (x, y, adjusted_height)
        """
        anchor_x = self._anchor_x
        anchor_y = self._anchor_y

        margin = 10
        safe_left = margin
        safe_top = margin
        safe_right = self.root.winfo_screenwidth() - margin
        safe_bottom = self.root.winfo_screenheight() - 50 - margin  # taskbar margin

        x = anchor_x + 15
        if x + width > safe_right:
            x = anchor_x - width - 15
        x = max(safe_left, min(x, safe_right - width))

        y = anchor_y + 20
        max_safe_height = safe_bottom - safe_top
        if height >= max_safe_height:
            return x, safe_top, max_safe_height

        if y + height > safe_bottom:
            # Try above the anchor, else pin to the bottom
            y_above = anchor_y - height - 20
            y = y_above if y_above >= safe_top else max(safe_top, safe_bottom - height)

        return x, y, height

    def _start_move(self, event):
        """Record start position for dragging."""
        self._drag_x = event.x_root
        self._drag_y = event.y_root

    def _on_drag(self, event):
        """Handle dragging of the tooltip."""
        if not self.tooltip:
            return

        deltax = event.x_root - self._drag_x
        deltay = event.y_root - self._drag_y
        self._drag_x = event.x_root
        self._drag_y = event.y_root

        x = self.tooltip.winfo_x() + deltax
        y = self.tooltip.winfo_y() + deltay
        self.tooltip.geometry(f"+{x}+{y}")

    def _handle_copy(self):
        if not (self._on_copy and self._on_copy(self._current_text)):
            return
        self.set_copy_button_text("Copied!")
        if self.tooltip:
            self.tooltip.after(1000, lambda: self.set_copy_button_text("Copy"))

    def set_copy_button_text(self, text: str):
        """Set copy button text (e.g., for 'Copied!' feedback)."""
        if self.tooltip_copy_btn:
            try:
                self.tooltip_copy_btn.configure(text=text)
            except tk.TclError:
                pass  # Tooltip closed in the meantime

    def close(self):
        """Close the tooltip."""
        if self.tooltip:
            try:
                if self.tooltip.winfo_exists():
                    self.tooltip.destroy()
            except tk.TclError:
                pass
            self.tooltip = None
            self.tooltip_text = None
            self.tooltip_copy_btn = None

    hide = close
