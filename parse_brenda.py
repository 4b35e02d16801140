"""Entry point into this code to parse the desired file. 

python parse_brenda.py --brenda-flat-file data/raw/BRENDA/brenda_download.txt --out-prefix results/BRENDA/parsed_brenda --load-prev

"""

from brenda_parser.parse_brenda_main import main


if __name__=="__main__": 
    main()
