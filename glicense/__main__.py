from glicense.cli.main import main

main()
