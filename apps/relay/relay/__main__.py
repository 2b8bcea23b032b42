from relay.server import main

main()
