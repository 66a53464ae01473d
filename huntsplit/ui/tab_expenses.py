import customtkinter as ctk
from tkinter import ttk, messagebox

from huntsplit.application.hunt_service import HuntService
from huntsplit.domain.entities import ExpenseReport
from huntsplit.domain.errors import HuntSplitError
from huntsplit.ui.formatting import fmt_gold


class ExpensesTab(ctk.CTkFrame):
    def __init__(self, parent, service: HuntService, main_app):
        super().__init__(parent)
        self.service = service
        self.main_app = main_app
        self._build()

    def _build(self):
        frm = self

        form = ctk.CTkFrame(frm)
        form.pack(fill="x", padx=8, pady=6)
        ctk.CTkLabel(form, text="Código").pack(side="left", padx=5)
        self.entry_code = ctk.CTkEntry(form, width=130)
        self.entry_code.pack(side="left", padx=6)
        ctk.CTkLabel(form, text="Personagem").pack(side="left", padx=(10, 2))
        self.entry_reporter = ctk.CTkEntry(form, width=160)
        self.entry_reporter.pack(side="left", padx=6)
        ctk.CTkLabel(form, text="Supplies").pack(side="left", padx=(10, 2))
        self.entry_amount = ctk.CTkEntry(form, width=110)
        self.entry_amount.pack(side="left", padx=6)
        ctk.CTkButton(form, text="Registrar", width=100, command=self.registrar).pack(side="left", padx=6)
        ctk.CTkButton(form, text="Ver Balance", width=100, command=lambda: self.show_hunt(self.entry_code.get().strip())).pack(side="left", padx=6)

        self.lbl_resumo = ctk.CTkLabel(frm, text="")
        self.lbl_resumo.pack(anchor="w", padx=12)

        cols = ("personagem", "balance")
        self.tree = ttk.Treeview(frm, columns=cols, show="headings", height=14)
        for c, w in zip(cols, (260, 160)):
            self.tree.heading(c, text=c.upper())
            self.tree.column(c, width=w, anchor="center")
        self.tree.pack(fill="both", expand=True, padx=8, pady=6)

    def registrar(self):
        code = self.entry_code.get().strip()
        reporter = self.entry_reporter.get().strip()
        amount = self.entry_amount.get().strip()
        if not code or not reporter or not amount:
            messagebox.showwarning("Aviso", "Informe Código, Personagem e Supplies.")
            return

        try:
            self.service.persist_expense(ExpenseReport(code=code, reporter=reporter, amount=amount))
        except HuntSplitError as e:
            messagebox.showerror("Erro", str(e))
            return

        self.entry_amount.delete(0, "end")
        self.show_hunt(code)
        self.main_app.refresh_all()

    def show_hunt(self, code: str):
        if not code:
            return
        self.entry_code.delete(0, "end")
        self.entry_code.insert(0, code)

        try:
            summary = self.service.get_balance_data(code)
        except HuntSplitError as e:
            messagebox.showerror("Erro", str(e))
            return

        self.lbl_resumo.configure(
            text=f"Hunt {summary.code}  |  Loot: {fmt_gold(summary.loot)}  |  Supplies: {fmt_gold(summary.total_expenses)}"
        )
        self.tree.delete(*self.tree.get_children())
        for b in summary.balances:
            self.tree.insert("", "end", values=(b.reporter, fmt_gold(b.balance)))
