from backend.carcompare.core.server import main

main()
