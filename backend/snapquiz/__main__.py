from snapquiz.server import main

main()
