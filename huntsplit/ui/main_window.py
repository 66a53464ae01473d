import customtkinter as ctk

from huntsplit.application.hunt_service import HuntService
from huntsplit.application.interfaces.repository import HuntRepository
from huntsplit.infrastructure.parser.log_parser import LogParser

ctk.set_appearance_mode("System")  # Modes: "System" (standard), "Dark", "Light"
ctk.set_default_color_theme("blue")  # Themes: "blue" (standard), "green", "dark-blue"


class MainApp(ctk.CTk):
    def __init__(self, service: HuntService, repository: HuntRepository, parser: LogParser):
        super().__init__()
        self.service = service
        self.repo = repository
        self.parser = parser

        self.title("Hunt Split")

        # Restore configuration
        saved_geo = self.repo.get_setting("window_geometry")
        if saved_geo:
            self.geometry(saved_geo)
        else:
            self.geometry(f"{980}x{640}+0+0")

        self.minsize(900, 600)
        self.protocol("WM_DELETE_WINDOW", self.on_close)

        self._build_ui()

    def on_close(self):
        self.repo.set_setting("window_geometry", self.geometry())
        self.destroy()

    def _build_ui(self):
        self.tabview = ctk.CTkTabview(self)
        self.tabview.pack(fill="both", expand=True, padx=8, pady=8)

        self.tabview.add("Nova Hunt")
        self.tabview.add("Despesas")
        self.tabview.add("Mês")

        from huntsplit.ui.tab_new_hunt import NewHuntTab
        from huntsplit.ui.tab_expenses import ExpensesTab
        from huntsplit.ui.tab_month import MonthTab

        self.tab_new_hunt = NewHuntTab(self.tabview.tab("Nova Hunt"), self.service, self.parser, self)
        self.tab_new_hunt.pack(fill="both", expand=True)

        self.tab_expenses = ExpensesTab(self.tabview.tab("Despesas"), self.service, self)
        self.tab_expenses.pack(fill="both", expand=True)

        self.tab_month = MonthTab(self.tabview.tab("Mês"), self.service, self)
        self.tab_month.pack(fill="both", expand=True)

    def hunt_created(self, code: str):
        """Called after a new hunt is stored"""
        self.tab_expenses.show_hunt(code)
        self.tab_month.refresh()
        self.tabview.set("Despesas")

    def refresh_all(self):
        self.tab_month.refresh()
