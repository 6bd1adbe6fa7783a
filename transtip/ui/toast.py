"""
Toast notifications for TransTip.
Short messages in the bottom-right corner that dismiss themselves.
"""
import tkinter as tk
from dataclasses import dataclass
from enum import Enum
from typing import Dict, List, Optional


class ToastType(Enum):
    """Types of toast notifications with associated styling."""
    INFO = "info"
    ERROR = "error"


@dataclass
class ToastStyle:
    bg: str
    fg: str
    icon: str
    default_duration: int


class ToastManager:
    """Stacks toasts above each other and removes them after a delay.

    Usage:
        toast = ToastManager(root)
        toast.show_info("No word/sentence found at this position")
        toast.show_error("Cannot start trans", duration=5000)
    """

    STYLES = {
        ToastType.INFO: ToastStyle("#17a2b8", "#ffffff", "ℹ", 2500),
        ToastType.ERROR: ToastStyle("#dc3545", "#ffffff", "✕", 4000),
    }

    MARGIN_BOTTOM = 60   # Above taskbar
    MARGIN_RIGHT = 20
    TOAST_GAP = 10
    MAX_TOASTS = 4

    def __init__(self, root: tk.Tk) -> None:
        self.root = root
        self.active_toasts: List[tk.Toplevel] = []
        self._dismiss_jobs: Dict[tk.Toplevel, str] = {}

    def show(self, message: str, toast_type: ToastType = ToastType.INFO,
             duration: Optional[int] = None) -> tk.Toplevel:
        """Show a toast.

        Args:
            message: Text to display
            toast_type: Affects color and icon
            duration: Display time in ms (None = default for the type)
        """
        if len(self.active_toasts) >= self.MAX_TOASTS:
            self.dismiss(self.active_toasts[0])

        style = self.STYLES[toast_type]
        toast = tk.Toplevel(self.root)
        toast.overrideredirect(True)
        toast.attributes('-topmost', True)
        toast.configure(bg=style.bg)

        frame = tk.Frame(toast, bg=style.bg, padx=20, pady=12)
        frame.pack(fill=tk.BOTH, expand=True)
        label = tk.Label(frame, text=f"{style.icon}  {message}", bg=style.bg, fg=style.fg,
                         font=('Segoe UI', 11), wraplength=300, justify=tk.LEFT)
        label.pack()

        for widget in (toast, frame, label):
            widget.bind('<Button-1>', lambda e, t=toast: self.dismiss(t))

        self.active_toasts.append(toast)
        toast.update_idletasks()
        self._reposition_all()

        self._dismiss_jobs[toast] = toast.after(duration or style.default_duration,
                                                lambda: self.dismiss(toast))
        return toast

    def show_info(self, message: str, duration: Optional[int] = None) -> tk.Toplevel:
        return self.show(message, ToastType.INFO, duration)

    def show_error(self, message: str, duration: Optional[int] = None) -> tk.Toplevel:
        return self.show(message, ToastType.ERROR, duration)

    def dismiss(self, toast: tk.Toplevel) -> None:
        if toast not in self.active_toasts:
            return
        self.active_toasts.remove(toast)

        job = self._dismiss_jobs.pop(toast, None)
        try:
            if job:
                toast.after_cancel(job)
            if toast.winfo_exists():
                toast.destroy()
        except tk.TclError:
            pass  # Already destroyed
        self._reposition_all()

    def dismiss_all(self) -> None:
        for toast in self.active_toasts[:]:
            self.dismiss(toast)

    def _reposition_all(self) -> None:
        """Stack toasts upwards from the bottom-right corner."""
        screen_w = self.root.winfo_screenwidth()
        screen_h = self.root.winfo_screenheight()

        y_offset = self.MARGIN_BOTTOM
        for toast in self.active_toasts:
            try:
                toast_w = toast.winfo_reqwidth()
                toast_h = toast.winfo_reqheight()
                toast.geometry(f"+{screen_w - toast_w - self.MARGIN_RIGHT}+{screen_h - toast_h - y_offset}")
                y_offset += toast_h + self.TOAST_GAP
            except tk.TclError:
                pass  # Toast was destroyed during iteration
