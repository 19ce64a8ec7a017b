from anvil_action.cli import cli

cli()
