#!python3 -X utf8

if __name__ == '__main__':
    from hashrun.cli import run
    run()
