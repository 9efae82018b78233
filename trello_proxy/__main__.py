from trello_proxy.cli import main

main()
