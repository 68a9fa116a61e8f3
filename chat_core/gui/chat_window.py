import asyncio
import threading
import tkinter as tk
from tkinter import scrolledtext

from chat_core.api.service import get_default_controller


class App:
    """Tk 前端：只负责把 render(history, pending) 画出来并转发输入。

    控制器运行在后台线程的事件循环里，所有提交都通过
    call_soon_threadsafe 投递过去；渲染结果再用 root.after 切回 Tk 线程。
    """

    def __init__(self, root):
        self.root = root
        self.root.title("Simple LLM Chat")
        self.loop = asyncio.new_event_loop()
        self.pending = False
        threading.Thread(target=self.loop.run_forever, daemon=True).start()
        self.controller = get_default_controller(render=self.on_render)

        tk.Label(root, text="Simple LLM Chat", font=("TkDefaultFont", 14, "bold")).pack(pady=6)
        self.chat = scrolledtext.ScrolledText(root, width=80, height=24, wrap=tk.WORD)
        self.chat.pack(fill=tk.BOTH, expand=True, padx=8)
        self.chat.tag_config("user", foreground="#1a73e8", justify=tk.RIGHT)
        self.chat.tag_config("assistant", foreground="#202124")
        self.chat.tag_config("thinking", foreground="#5f6368", font=("TkDefaultFont", 10, "italic"))
        self.chat.config(state=tk.DISABLED)

        row = tk.Frame(root)
        row.pack(fill=tk.X, padx=8, pady=6)
        self.input_var = tk.StringVar()
        self.input_var.trace_add("write", lambda *_: self._update_controls())
        self.entry = tk.Entry(row, textvariable=self.input_var)
        self.entry.pack(side=tk.LEFT, fill=tk.X, expand=True)
        self.entry.bind("<Return>", self.on_send_event)
        self.send_btn = tk.Button(row, text="Send", command=self.on_send)
        self.send_btn.pack(side=tk.LEFT)
        tk.Label(root, text="Note: Uses OpenAI API directly", fg="#5f6368").pack(pady=(0, 6))
        self._update_controls()

    def on_send(self):
        text = self.input_var.get()
        if self.pending or not text.strip():
            return
        self.input_var.set("")
        self.loop.call_soon_threadsafe(self.controller.submit, text)

    def on_send_event(self, event):
        self.on_send()
        return "break"

    def on_render(self, history, pending):
        # 在事件循环线程中被调用
        self.root.after(0, lambda: self._draw(history, pending))

    def _draw(self, history, pending):
        self.pending = pending
        self.chat.config(state=tk.NORMAL)
        self.chat.delete(1.0, tk.END)
        for m in history:
            tag = "user" if m.is_user else "assistant"
            self.chat.insert(tk.END, f"{m.content}\n\n", tag)
        if pending:
            self.chat.insert(tk.END, "Thinking...\n", "thinking")
        self.chat.config(state=tk.DISABLED)
        self.chat.see(tk.END)
        self._update_controls()

    def _update_controls(self):
        self.entry.config(state=tk.DISABLED if self.pending else tk.NORMAL)
        can_send = not self.pending and bool(self.input_var.get().strip())
        self.send_btn.config(state=tk.NORMAL if can_send else tk.DISABLED)

    def close(self):
        self.loop.call_soon_threadsafe(self.loop.stop)
        self.root.destroy()


def main():
    root = tk.Tk()
    app = App(root)
    root.protocol("WM_DELETE_WINDOW", app.close)
    root.mainloop()


if __name__ == "__main__":
    main()
