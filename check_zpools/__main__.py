from check_zpools.cli import main

main()
