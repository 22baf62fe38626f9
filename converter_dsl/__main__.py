from converter_dsl.cli.cli import main

main()
