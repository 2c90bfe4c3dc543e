from find_dupes.cli import main

main()
