from elevation_chart.cli import main

main()
