from gocross.cli.main import main

main()
