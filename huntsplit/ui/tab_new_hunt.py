import customtkinter as ctk
import tkinter as tk
from tkinter import filedialog, messagebox

from huntsplit.application.hunt_service import HuntService
from huntsplit.domain.errors import HuntSplitError
from huntsplit.infrastructure.parser.log_parser import LogParser


class NewHuntTab(ctk.CTkFrame):
    def __init__(self, parent, service: HuntService, parser: LogParser, main_app):
        super().__init__(parent)
        self.service = service
        self.parser = parser
        self.main_app = main_app
        self._build()

    def _build(self):
        ctk.CTkLabel(self, text="Personagem").grid(row=0, column=0, sticky="w", padx=5, pady=5)
        self.entry_reporter = ctk.CTkEntry(self, width=200)
        self.entry_reporter.grid(row=0, column=1, sticky="w", padx=5, pady=5)

        ctk.CTkButton(self, text="Abrir Arquivo Hunt", command=self.abrir_arquivo).grid(row=0, column=2, padx=5, sticky="w")

        ctk.CTkLabel(self, text="Conteúdo da Hunt").grid(row=1, column=0, sticky="nw", padx=5, pady=(10, 0))
        self.text_dados = ctk.CTkTextbox(self, width=700, height=380)
        self.text_dados.grid(row=1, column=1, columnspan=2, padx=5, pady=(10, 0), sticky="nsew")

        ctk.CTkButton(self, text="Criar Hunt", command=self.criar_hunt).grid(row=2, column=1, pady=10, sticky="w")
        self.lbl_code = ctk.CTkLabel(self, text="")
        self.lbl_code.grid(row=2, column=2, pady=10, sticky="w")

        self.grid_rowconfigure(1, weight=1)
        self.grid_columnconfigure(1, weight=1)

    def abrir_arquivo(self):
        caminho = filedialog.askopenfilename(
            filetypes=[("Text/Log", "*.txt *.log"), ("Todos", "*.*")]
        )
        if not caminho:
            return
        try:
            with open(caminho, "r", encoding="utf-8") as f:
                conteudo = f.read()
        except UnicodeDecodeError:
            with open(caminho, "r", encoding="latin-1") as f:
                conteudo = f.read()
        self.text_dados.delete("1.0", tk.END)
        self.text_dados.insert(tk.END, conteudo)

    def criar_hunt(self):
        dados_hunt = self.text_dados.get("1.0", tk.END).strip()
        reporter = self.entry_reporter.get().strip()

        if not reporter or not dados_hunt:
            messagebox.showwarning("Aviso", "Informe o Personagem e carregue/cole a Hunt.")
            return

        try:
            report = self.parser.parse_session(dados_hunt, reporter)
            code = self.service.persist_loot(report)
        except HuntSplitError as e:
            messagebox.showerror("Erro", str(e))
            return

        self.lbl_code.configure(text=f"Código: {code}")
        # Share the code with the party
        self.clipboard_clear()
        self.clipboard_append(code)
        messagebox.showinfo("Sucesso", f"Hunt criada com o código {code} (copiado).")
        self.main_app.hunt_created(code)
