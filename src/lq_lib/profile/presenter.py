# Released under MIT License.
# Copyright (c) 2025 Ladislav Bartos and Robert Vacha Lab

from rich.console import Console, Group
from rich.panel import Panel
from rich.table import Table
from rich.text import Text

from lq_lib.core.common import get_panel_width
from lq_lib.core.config import CFG
from lq_lib.properties.host_profile import HostProfile


class ProfilePresenter:
    """
    Presents the capacity of the host.
    """

    def __init__(self, profile: HostProfile):
        self._profile = profile

    def dumpYaml(self) -> None:
        """
        Print the YAML representation of the profile to stdout.
        """
        print(self._profile.toYaml(), end="")

    def createProfilePanel(self, console: Console | None = None) -> Group:
        """
        Create a Rich panel displaying the host profile.

        Args:
            console (Console | None): Optional Rich Console instance.
                If None, a new Console will be created.

        Returns:
            Group: Rich Group containing the profile panel.
        """
        console = console or Console()
        settings = CFG.profile_presenter

        panel = Panel(
            self._createProfileTable(),
            title=Text("SERVER SPECIFICATIONS", style=settings.title_style, justify="center"),
            border_style=settings.border_style,
            padding=(1, 2),
            width=get_panel_width(console, 2, settings.min_width, settings.max_width),
            expand=False,
        )

        return Group(Text(""), panel, Text(""))

    def _createProfileTable(self) -> Table:
        """
        Construct a two-column table with the properties of the host.
        """
        settings = CFG.profile_presenter
        table = Table(show_header=False, box=None, padding=(0, 1))
        table.add_column(justify="right", style=settings.key_style)
        table.add_column(justify="left", style=settings.value_style)

        profile = self._profile
        table.add_row("CPU cores:", str(profile.cpu_cores))
        table.add_row("Total RAM:", f"{profile.total_ram_gb}GB")
        table.add_row("Available RAM:", f"{profile.available_ram_gb}GB")
        table.add_row(
            "Server type:", Text(profile.tier.describe(), style=profile.tier.color)
        )
        table.add_row("Recommended processes:", str(profile.recommended_processes))

        return table
