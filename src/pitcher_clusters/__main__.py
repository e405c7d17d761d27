from pitcher_clusters.cli.app import app

app()
