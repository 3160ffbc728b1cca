from dotenv import find_dotenv, load_dotenv

from translation_patcher.cli.main import cli


def main() -> None:
    # Pick up OPENROUTER_API_KEY from a .env file in or above the working directory
    load_dotenv(find_dotenv(usecwd=True))
    cli()


if __name__ == "__main__":
    main()
