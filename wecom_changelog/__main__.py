from wecom_changelog.cli.main import main

if __name__ == "__main__":
    main()
