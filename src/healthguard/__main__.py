from healthguard.cli import main

main()
