"""UI string catalogs keyed by locale code."""

TRANSLATIONS: dict[str, dict[str, str]] = {
    "ar": {
        "site.title": "ملف أعمالي",
        "site.tagline": "مطوّر ويب ومحلل بيانات",
        "nav.home": "الرئيسية",
        "nav.about": "نبذة عني",
        "nav.projects": "المشاريع",
        "nav.blog": "المدونة",
        "nav.contact": "تواصل معي",
        "page.index.heading": "مرحباً بك",
        "page.index.body": "أهلاً بك في موقعي الشخصي حيث أشارك مشاريعي ومقالاتي.",
        "page.about.heading": "نبذة عني",
        "page.about.body": "أعمل على بناء تطبيقات ويب متعددة اللغات وسهلة الوصول.",
        "page.projects.heading": "المشاريع",
        "page.projects.body": "مجموعة مختارة من الأعمال والمشاريع مفتوحة المصدر.",
        "page.blog.heading": "المدونة",
        "page.blog.body": "مقالات حول تطوير الويب والبيانات.",
        "page.contact.heading": "تواصل معي",
        "page.contact.body": "يسعدني تواصلك عبر البريد الإلكتروني أو الشبكات الاجتماعية.",
        "language.switch": "اللغة",
        "footer.rights": "جميع الحقوق محفوظة",
    },
    "en": {
        "site.title": "My Portfolio",
        "site.tagline": "Web developer and data analyst",
        "nav.home": "Home",
        "nav.about": "About",
        "nav.projects": "Projects",
        "nav.blog": "Blog",
        "nav.contact": "Contact",
        "page.index.heading": "Welcome",
        "page.index.body": "Welcome to my personal site, where I share my projects and writing.",
        "page.about.heading": "About me",
        "page.about.body": "I build multilingual, accessible web applications.",
        "page.projects.heading": "Projects",
        "page.projects.body": "A selection of work and open-source projects.",
        "page.blog.heading": "Blog",
        "page.blog.body": "Articles about web development and data.",
        "page.contact.heading": "Contact",
        "page.contact.body": "Feel free to reach out by email or on social media.",
        "language.switch": "Language",
        "footer.rights": "All rights reserved",
    },
}
