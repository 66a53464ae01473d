import customtkinter as ctk
import tkinter as tk
from tkinter import messagebox
from matplotlib.figure import Figure
from matplotlib.backends.backend_tkagg import FigureCanvasTkAgg
import mplcursors

from huntsplit.application.hunt_service import HuntService
from huntsplit.application.month_report import reporter_summary
from huntsplit.ui.formatting import fmt_gold


class MonthTab(ctk.CTkFrame):
    def __init__(self, parent, service: HuntService, main_app):
        super().__init__(parent)
        self.service = service
        self.main_app = main_app
        self._build()

    def _build(self):
        top = ctk.CTkFrame(self)
        top.pack(fill="x", padx=8, pady=8)
        ctk.CTkButton(top, text="Atualizar", width=100, command=self.refresh).pack(side="left", padx=5)
        ctk.CTkButton(top, text="Gráfico Balance", command=self.show_chart).pack(side="left", padx=10)

        self.txt_resumo = ctk.CTkTextbox(self, width=800, height=300)
        self.txt_resumo.pack(fill="both", expand=True, padx=8, pady=8)

        self.refresh()

    def refresh(self):
        hunts = self.service.get_month_hunts()
        summary = reporter_summary(hunts)

        self.txt_resumo.delete("1.0", tk.END)
        self.txt_resumo.insert(tk.END, "===== HUNTS DO MÊS =====\n")
        self.txt_resumo.insert(tk.END, f"Total de Hunts: {len(hunts)}\n")
        self.txt_resumo.insert(tk.END, f"Loot total:     {fmt_gold(sum(h.loot for h in hunts))}\n\n")

        if summary.empty:
            self.txt_resumo.insert(tk.END, "Nenhuma hunt registrada neste mês.\n")
            return

        self.txt_resumo.insert(tk.END, "===== POR PERSONAGEM =====\n")
        for reporter, row in summary.iterrows():
            self.txt_resumo.insert(
                tk.END,
                f"{reporter}: {int(row['hunts'])} hunts | supplies {fmt_gold(row['supplies'])}"
                f" | balance {fmt_gold(row['balance'])} | profit {fmt_gold(row['profit'])}\n",
            )

    def show_chart(self):
        summary = reporter_summary(self.service.get_month_hunts())
        if summary.empty:
            messagebox.showinfo("Sem dados", "Não há hunts neste mês.")
            return

        win = ctk.CTkToplevel(self)
        win.title("Balance por Personagem")
        win.geometry("800x450")

        fig = Figure(figsize=(8, 4.5), dpi=100)
        ax = fig.add_subplot(111)
        reporters = list(summary.index)
        bars_bal = ax.bar(reporters, summary["balance"], label="Balance", color="#2ca02c")
        bars_sup = ax.bar(reporters, summary["supplies"], label="Supplies", color="#d62728", alpha=0.6)
        ax.set_ylabel("Valor")
        ax.grid(True, axis="y", linestyle=':', alpha=0.6)
        ax.legend()
        fig.autofmt_xdate()

        cursor = mplcursors.cursor([bars_bal, bars_sup], hover=True)
        @cursor.connect("add")
        def on_add(sel):
            val = sel.artist[sel.index].get_height()
            sel.annotation.set_text(f"{reporters[sel.index]}\n{sel.artist.get_label()}: {val:,.0f}")

        canvas = FigureCanvasTkAgg(fig, master=win)
        canvas.draw()
        canvas.get_tk_widget().pack(fill="both", expand=True)
