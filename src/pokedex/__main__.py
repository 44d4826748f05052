from pokedex.app import main

main()
