"""DinerDesk: table-side ordering, kitchen tickets and menu admin in the terminal."""
