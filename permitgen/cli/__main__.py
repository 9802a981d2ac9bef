from permitgen.cli.main import main

main()
