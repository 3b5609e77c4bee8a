from tristream.cli import main

main()
