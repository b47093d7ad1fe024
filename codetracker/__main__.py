from codetracker.main import main

main()
