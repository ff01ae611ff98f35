from cmdbox.cli import main

main()
