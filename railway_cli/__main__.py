from railway_cli.cli import main

main()
