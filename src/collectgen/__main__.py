from collectgen.cli import main

main()
