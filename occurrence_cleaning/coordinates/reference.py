"""
Reference locations used by the coordinate tests.

Each table is a list of (name, longitude, latitude) tuples in decimal
degrees. Records lying close to one of these points are usually
georeferenced to an administrative location rather than observed there.
"""

ReferencePoint = tuple[str, float, float]

GBIF_HQ: ReferencePoint = ("GBIF Secretariat, Copenhagen", 12.58, 55.68)

CAPITALS: list[ReferencePoint] = [
    ("Abu Dhabi", 54.37, 24.47),
    ("Abuja", 7.49, 9.06),
    ("Accra", -0.19, 5.56),
    ("Addis Ababa", 38.75, 9.03),
    ("Algiers", 3.06, 36.75),
    ("Amman", 35.93, 31.95),
    ("Amsterdam", 4.90, 52.37),
    ("Andorra la Vella", 1.52, 42.51),
    ("Ankara", 32.86, 39.93),
    ("Antananarivo", 47.52, -18.91),
    ("Apia", -171.76, -13.83),
    ("Ashgabat", 58.38, 37.95),
    ("Asmara", 38.93, 15.33),
    ("Astana", 71.45, 51.17),
    ("Asuncion", -57.64, -25.26),
    ("Athens", 23.73, 37.98),
    ("Baghdad", 44.37, 33.31),
    ("Baku", 49.87, 40.41),
    ("Bamako", -8.00, 12.64),
    ("Bandar Seri Begawan", 114.94, 4.89),
    ("Bangkok", 100.50, 13.76),
    ("Bangui", 18.56, 4.39),
    ("Banjul", -16.58, 13.45),
    ("Basseterre", -62.72, 17.30),
    ("Beijing", 116.41, 39.90),
    ("Beirut", 35.50, 33.89),
    ("Belgrade", 20.46, 44.79),
    ("Belmopan", -88.77, 17.25),
    ("Berlin", 13.40, 52.52),
    ("Bern", 7.45, 46.95),
    ("Bishkek", 74.59, 42.87),
    ("Bissau", -15.60, 11.86),
    ("Bogota", -74.07, 4.71),
    ("Brasilia", -47.88, -15.79),
    ("Bratislava", 17.11, 48.15),
    ("Brazzaville", 15.28, -4.27),
    ("Bridgetown", -59.62, 13.10),
    ("Brussels", 4.35, 50.85),
    ("Bucharest", 26.10, 44.43),
    ("Budapest", 19.04, 47.50),
    ("Buenos Aires", -58.38, -34.60),
    ("Cairo", 31.24, 30.04),
    ("Canberra", 149.13, -35.28),
    ("Caracas", -66.90, 10.48),
    ("Castries", -60.99, 14.01),
    ("Chisinau", 28.86, 47.01),
    ("Colombo", 79.86, 6.93),
    ("Conakry", -13.71, 9.64),
    ("Copenhagen", 12.57, 55.68),
    ("Dakar", -17.47, 14.72),
    ("Damascus", 36.29, 33.51),
    ("Dhaka", 90.41, 23.81),
    ("Dili", 125.57, -8.56),
    ("Djibouti", 43.15, 11.59),
    ("Dodoma", 35.74, -6.16),
    ("Doha", 51.53, 25.29),
    ("Dublin", -6.26, 53.35),
    ("Dushanbe", 68.79, 38.56),
    ("Freetown", -13.23, 8.48),
    ("Funafuti", 179.20, -8.52),
    ("Gaborone", 25.91, -24.65),
    ("Georgetown", -58.16, 6.80),
    ("Gitega", 29.92, -3.43),
    ("Guatemala City", -90.51, 14.63),
    ("Hanoi", 105.83, 21.03),
    ("Harare", 31.05, -17.83),
    ("Havana", -82.37, 23.11),
    ("Helsinki", 24.94, 60.17),
    ("Honiara", 159.97, -9.43),
    ("Islamabad", 73.05, 33.68),
    ("Jakarta", 106.85, -6.21),
    ("Jerusalem", 35.22, 31.77),
    ("Juba", 31.58, 4.86),
    ("Kabul", 69.21, 34.56),
    ("Kampala", 32.58, 0.35),
    ("Kathmandu", 85.32, 27.72),
    ("Khartoum", 32.53, 15.50),
    ("Kyiv", 30.52, 50.45),
    ("Kigali", 30.06, -1.94),
    ("Kingston", -76.79, 18.02),
    ("Kingstown", -61.23, 13.16),
    ("Kinshasa", 15.27, -4.44),
    ("Kuala Lumpur", 101.69, 3.14),
    ("Kuwait City", 47.98, 29.38),
    ("La Paz", -68.15, -16.50),
    ("Libreville", 9.45, 0.42),
    ("Lilongwe", 33.79, -13.96),
    ("Lima", -77.04, -12.05),
    ("Lisbon", -9.14, 38.72),
    ("Ljubljana", 14.51, 46.06),
    ("Lome", 1.23, 6.13),
    ("London", -0.13, 51.51),
    ("Luanda", 13.23, -8.84),
    ("Lusaka", 28.32, -15.39),
    ("Luxembourg", 6.13, 49.61),
    ("Madrid", -3.70, 40.42),
    ("Majuro", 171.38, 7.09),
    ("Malabo", 8.78, 3.75),
    ("Male", 73.51, 4.18),
    ("Managua", -86.25, 12.11),
    ("Manama", 50.59, 26.23),
    ("Manila", 120.98, 14.60),
    ("Maputo", 32.57, -25.97),
    ("Maseru", 27.48, -29.31),
    ("Mbabane", 31.14, -26.31),
    ("Mexico City", -99.13, 19.43),
    ("Minsk", 27.56, 53.90),
    ("Mogadishu", 45.32, 2.05),
    ("Monaco", 7.42, 43.74),
    ("Monrovia", -10.80, 6.30),
    ("Montevideo", -56.16, -34.90),
    ("Moroni", 43.26, -11.70),
    ("Moscow", 37.62, 55.76),
    ("Muscat", 58.41, 23.59),
    ("Nairobi", 36.82, -1.29),
    ("Nassau", -77.34, 25.05),
    ("Naypyidaw", 96.13, 19.76),
    ("N'Djamena", 15.04, 12.13),
    ("New Delhi", 77.21, 28.61),
    ("Niamey", 2.11, 13.51),
    ("Nicosia", 33.38, 35.19),
    ("Nouakchott", -15.98, 18.08),
    ("Nuku'alofa", -175.20, -21.14),
    ("Oslo", 10.75, 59.91),
    ("Ottawa", -75.70, 45.42),
    ("Ouagadougou", -1.52, 12.37),
    ("Palikir", 158.16, 6.92),
    ("Panama City", -79.52, 8.98),
    ("Paramaribo", -55.20, 5.85),
    ("Paris", 2.35, 48.86),
    ("Phnom Penh", 104.93, 11.56),
    ("Podgorica", 19.26, 42.44),
    ("Port Louis", 57.50, -20.16),
    ("Port Moresby", 147.18, -9.44),
    ("Port of Spain", -61.52, 10.65),
    ("Port Vila", 168.32, -17.73),
    ("Port-au-Prince", -72.34, 18.54),
    ("Porto-Novo", 2.63, 6.50),
    ("Prague", 14.44, 50.08),
    ("Praia", -23.51, 14.93),
    ("Pretoria", 28.19, -25.75),
    ("Pyongyang", 125.76, 39.04),
    ("Quito", -78.47, -0.18),
    ("Rabat", -6.84, 34.02),
    ("Reykjavik", -21.94, 64.15),
    ("Riga", 24.11, 56.95),
    ("Riyadh", 46.68, 24.71),
    ("Rome", 12.50, 41.90),
    ("Roseau", -61.39, 15.30),
    ("San Jose", -84.09, 9.93),
    ("San Marino", 12.45, 43.94),
    ("San Salvador", -89.22, 13.69),
    ("Sana'a", 44.21, 15.37),
    ("Santiago", -70.67, -33.45),
    ("Santo Domingo", -69.93, 18.49),
    ("Sao Tome", 6.73, 0.34),
    ("Sarajevo", 18.41, 43.86),
    ("Seoul", 126.98, 37.57),
    ("Singapore", 103.82, 1.35),
    ("Skopje", 21.43, 42.00),
    ("Sofia", 23.32, 42.70),
    ("Stockholm", 18.07, 59.33),
    ("Suva", 178.44, -18.14),
    ("Taipei", 121.57, 25.03),
    ("Tallinn", 24.75, 59.44),
    ("Tarawa", 173.03, 1.45),
    ("Tashkent", 69.24, 41.30),
    ("Tbilisi", 44.79, 41.72),
    ("Tegucigalpa", -87.21, 14.07),
    ("Tehran", 51.39, 35.69),
    ("Thimphu", 89.64, 27.47),
    ("Tirana", 19.82, 41.33),
    ("Tokyo", 139.69, 35.69),
    ("Tripoli", 13.19, 32.89),
    ("Tunis", 10.18, 36.81),
    ("Ulaanbaatar", 106.91, 47.89),
    ("Vaduz", 9.52, 47.14),
    ("Valletta", 14.51, 35.90),
    ("Victoria", 55.45, -4.62),
    ("Vienna", 16.37, 48.21),
    ("Vientiane", 102.63, 17.98),
    ("Vilnius", 25.28, 54.69),
    ("Warsaw", 21.01, 52.23),
    ("Washington", -77.04, 38.91),
    ("Wellington", 174.78, -41.29),
    ("Windhoek", 17.08, -22.56),
    ("Yamoussoukro", -5.28, 6.83),
    ("Yaounde", 11.50, 3.85),
    ("Yaren", 166.92, -0.55),
    ("Yerevan", 44.51, 40.18),
    ("Zagreb", 15.98, 45.81),
    # Territories in the Southern Ocean
    ("Stanley", -57.85, -51.69),
    ("King Edward Point", -36.50, -54.28),
    ("Port-aux-Francais", 70.22, -49.35),
]

CENTROIDS: list[ReferencePoint] = [
    ("Afghanistan", 66.03, 33.83),
    ("Albania", 20.07, 41.14),
    ("Algeria", 2.63, 28.16),
    ("Angola", 17.54, -12.29),
    ("Antarctica", 0.0, -82.86),
    ("Argentina", -65.18, -35.38),
    ("Armenia", 44.93, 40.29),
    ("Australia", 134.49, -25.73),
    ("Austria", 14.13, 47.59),
    ("Azerbaijan", 47.55, 40.29),
    ("Bangladesh", 90.27, 23.87),
    ("Belarus", 28.03, 53.54),
    ("Belgium", 4.64, 50.64),
    ("Benin", 2.34, 9.64),
    ("Bhutan", 90.43, 27.41),
    ("Bolivia", -64.69, -16.71),
    ("Bosnia and Herzegovina", 17.79, 44.17),
    ("Botswana", 23.80, -22.18),
    ("Bouvet Island", 3.41, -54.42),
    ("Brazil", -53.10, -10.79),
    ("Bulgaria", 25.22, 42.77),
    ("Burkina Faso", -1.75, 12.27),
    ("Burundi", 29.89, -3.36),
    ("Cambodia", 104.91, 12.71),
    ("Cameroon", 12.74, 5.69),
    ("Canada", -98.31, 61.36),
    ("Central African Republic", 20.47, 6.57),
    ("Chad", 18.65, 15.33),
    ("Chile", -71.38, -37.73),
    ("China", 103.82, 36.56),
    ("Colombia", -73.08, 3.91),
    ("Costa Rica", -84.19, 9.98),
    ("Croatia", 16.40, 45.08),
    ("Cuba", -79.02, 21.62),
    ("Czechia", 15.31, 49.73),
    ("Democratic Republic of the Congo", 23.64, -2.88),
    ("Denmark", 10.03, 55.98),
    ("Dominican Republic", -70.50, 18.89),
    ("Ecuador", -78.75, -1.42),
    ("Egypt", 29.86, 26.50),
    ("Eritrea", 38.85, 15.36),
    ("Estonia", 25.54, 58.67),
    ("Ethiopia", 39.60, 8.62),
    ("Falkland Islands", -59.35, -51.74),
    ("Finland", 26.27, 64.50),
    ("France", 2.55, 46.56),
    ("French Southern Territories", 69.23, -49.25),
    ("Gabon", 11.79, -0.59),
    ("Georgia", 43.51, 42.17),
    ("Germany", 10.39, 51.11),
    ("Ghana", -1.22, 7.95),
    ("Greece", 22.96, 39.07),
    ("Greenland", -41.34, 74.71),
    ("Guatemala", -90.37, 15.69),
    ("Guinea", -10.94, 10.44),
    ("Guyana", -58.98, 4.79),
    ("Heard Island and McDonald Islands", 73.51, -53.09),
    ("Honduras", -86.62, 14.82),
    ("Hungary", 19.40, 47.16),
    ("Iceland", -18.57, 64.99),
    ("India", 79.61, 22.89),
    ("Indonesia", 117.24, -2.22),
    ("Iran", 54.27, 32.58),
    ("Iraq", 43.74, 33.04),
    ("Ireland", -8.14, 53.18),
    ("Israel", 35.00, 31.46),
    ("Italy", 12.07, 42.79),
    ("Ivory Coast", -5.57, 7.63),
    ("Japan", 138.03, 37.59),
    ("Jordan", 36.77, 31.25),
    ("Kazakhstan", 67.29, 48.16),
    ("Kenya", 37.79, 0.60),
    ("Kyrgyzstan", 74.54, 41.46),
    ("Laos", 103.74, 18.50),
    ("Latvia", 24.91, 56.85),
    ("Lebanon", 35.88, 33.92),
    ("Liberia", -9.32, 6.45),
    ("Libya", 18.01, 27.03),
    ("Lithuania", 23.89, 55.33),
    ("Madagascar", 46.70, -19.37),
    ("Malawi", 34.29, -13.22),
    ("Malaysia", 109.70, 3.79),
    ("Mali", -3.54, 17.35),
    ("Mauritania", -10.35, 20.26),
    ("Mexico", -102.52, 23.95),
    ("Moldova", 28.46, 47.20),
    ("Mongolia", 103.05, 46.83),
    ("Morocco", -6.29, 31.88),
    ("Mozambique", 35.53, -17.27),
    ("Myanmar", 96.49, 21.19),
    ("Namibia", 17.21, -22.13),
    ("Nepal", 83.92, 28.25),
    ("Netherlands", 5.28, 52.10),
    ("New Zealand", 171.48, -41.81),
    ("Nicaragua", -85.03, 12.85),
    ("Niger", 9.39, 17.42),
    ("Nigeria", 8.09, 9.59),
    ("North Korea", 127.18, 40.15),
    ("Norway", 15.35, 68.75),
    ("Oman", 56.10, 20.61),
    ("Pakistan", 69.34, 29.95),
    ("Panama", -80.12, 8.52),
    ("Papua New Guinea", 145.25, -6.46),
    ("Paraguay", -58.39, -23.23),
    ("Peru", -74.38, -9.15),
    ("Philippines", 122.88, 11.78),
    ("Poland", 19.39, 52.13),
    ("Portugal", -8.50, 39.60),
    ("Republic of the Congo", 15.22, -0.84),
    ("Romania", 24.97, 45.85),
    ("Russia", 96.69, 61.98),
    ("Rwanda", 29.92, -2.00),
    ("Saudi Arabia", 44.54, 24.12),
    ("Senegal", -14.47, 14.37),
    ("Serbia", 20.79, 44.22),
    ("Sierra Leone", -11.79, 8.56),
    ("Slovakia", 19.48, 48.71),
    ("Slovenia", 14.94, 46.12),
    ("Somalia", 45.71, 4.75),
    ("South Africa", 25.05, -29.00),
    ("South Georgia and the South Sandwich Islands", -36.43, -54.46),
    ("South Korea", 127.84, 36.39),
    ("South Sudan", 30.25, 7.31),
    ("Spain", -3.65, 40.24),
    ("Sri Lanka", 80.70, 7.61),
    ("Sudan", 29.94, 15.99),
    ("Suriname", -55.91, 4.13),
    ("Sweden", 16.75, 62.78),
    ("Switzerland", 8.21, 46.80),
    ("Syria", 38.51, 35.03),
    ("Taiwan", 120.95, 23.75),
    ("Tajikistan", 71.01, 38.53),
    ("Tanzania", 34.81, -6.28),
    ("Thailand", 101.00, 15.12),
    ("Togo", 0.96, 8.53),
    ("Tunisia", 9.55, 34.12),
    ("Turkey", 35.17, 39.06),
    ("Turkmenistan", 59.38, 39.12),
    ("Uganda", 32.36, 1.27),
    ("Ukraine", 31.38, 49.00),
    ("United Kingdom", -2.87, 54.12),
    ("United States", -112.46, 45.68),
    ("Uruguay", -56.02, -32.80),
    ("Uzbekistan", 63.14, 41.76),
    ("Venezuela", -66.18, 7.12),
    ("Vietnam", 106.30, 16.65),
    ("Yemen", 47.59, 15.91),
    ("Zambia", 27.73, -13.40),
    ("Zimbabwe", 29.85, -19.00),
]
