from weather_cache.server.cli import main

main()
