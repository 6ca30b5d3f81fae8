from cork.cli import main

main()
