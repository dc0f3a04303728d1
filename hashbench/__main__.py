from hashbench.run_benchmark import cli

cli()
