from shiritori_search.app.app import main

if __name__ == "__main__":
    main()
