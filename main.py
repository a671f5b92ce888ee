# main.py
from pixelpet.app import main


if __name__ == "__main__":
    main()
